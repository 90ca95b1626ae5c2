from flask import g, jsonify
from buzzinga.application import menus as menu_service
from buzzinga.normalizers.envelope import envelope
from buzzinga.normalizers.menu import normalize_menu
from buzzinga.utils.decorators import author_required
from buzzinga.utils.payload import json_body
from . import v1_bp


@v1_bp.route("/menus", methods=["GET"])
@author_required
def list_menus():
    return jsonify(envelope([normalize_menu(m) for m in menu_service.list_menus()]))


@v1_bp.route("/menus/<menu_id>", methods=["GET"])
@author_required
def get_menu(menu_id):
    return jsonify(envelope(normalize_menu(menu_service.get_menu(menu_id=menu_id))))


@v1_bp.route("/menus", methods=["POST"])
@author_required
def create_menu():
    menu = menu_service.create_menu(author_id=g.current_user.id, data=json_body())
    return jsonify(envelope(normalize_menu(menu), message="Menu created successfully")), 201


@v1_bp.route("/menus/<menu_id>", methods=["PUT"])
@author_required
def update_menu(menu_id):
    menu = menu_service.update_menu(menu_id=menu_id, data=json_body())
    return jsonify(envelope(normalize_menu(menu), message="Menu updated successfully")), 200


@v1_bp.route("/menus/<menu_id>", methods=["DELETE"])
@author_required
def delete_menu(menu_id):
    menu_service.delete_menu(menu_id=menu_id)
    return jsonify(envelope(message="Menu deleted successfully")), 200
