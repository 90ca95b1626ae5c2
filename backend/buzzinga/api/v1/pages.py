# buzzinga/api/v1/pages.py
from flask import g, request, jsonify
from buzzinga.application.pages.create_page import create_page as create_page_use_case
from buzzinga.application.pages.update_page import update_page as update_page_use_case
from buzzinga.application.pages.delete_page import delete_page as delete_page_use_case
from buzzinga.application.pages.queries import get_page as find_page, list_pages as find_pages
from buzzinga.normalizers.envelope import envelope
from buzzinga.normalizers.page import normalize_page
from buzzinga.utils.decorators import author_required
from buzzinga.utils.payload import json_body
from . import v1_bp


@v1_bp.route("/pages", methods=["GET"])
@author_required
def list_pages():
    pages = find_pages(
        author_id=g.current_user.id,
        status=request.args.get("status"),  # DRAFT | PUBLISHED | None
    )
    return jsonify(envelope([normalize_page(p) for p in pages]))


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@author_required
def get_page(page_id):
    return jsonify(envelope(normalize_page(find_page(page_id=page_id))))


@v1_bp.route("/pages", methods=["POST"])
@author_required
def create_page():
    page = create_page_use_case(
        author_id=g.current_user.id,
        data=json_body(),
    )
    return jsonify(envelope(normalize_page(page), message="Page created successfully")), 201


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@author_required
def update_page(page_id):
    page = update_page_use_case(page_id=page_id, data=json_body())
    return jsonify(envelope(normalize_page(page), message="Page updated successfully")), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@author_required
def delete_page(page_id):
    delete_page_use_case(page_id=page_id)
    return jsonify(envelope(message="Page deleted successfully")), 200
