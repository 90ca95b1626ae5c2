from flask import g, jsonify
from buzzinga.application import collections as collection_service
from buzzinga.normalizers.collection import normalize_collection, normalize_collection_item
from buzzinga.normalizers.envelope import envelope
from buzzinga.utils.decorators import author_required
from buzzinga.utils.payload import json_body
from . import v1_bp


@v1_bp.route("/collections", methods=["GET"])
@author_required
def list_collections():
    rows = collection_service.list_collections()
    return jsonify(envelope([
        normalize_collection(collection, item_count=count)
        for collection, count in rows
    ]))


@v1_bp.route("/collections/<collection_id>", methods=["GET"])
@author_required
def get_collection(collection_id):
    collection = collection_service.get_collection(collection_id=collection_id)
    return jsonify(envelope(normalize_collection(collection, include_items=True)))


@v1_bp.route("/collections", methods=["POST"])
@author_required
def create_collection():
    collection = collection_service.create_collection(
        author_id=g.current_user.id,
        data=json_body(),
    )
    return jsonify(envelope(
        normalize_collection(collection),
        message="Collection created successfully",
    )), 201


@v1_bp.route("/collections/<collection_id>", methods=["PUT"])
@author_required
def update_collection(collection_id):
    collection = collection_service.update_collection(
        collection_id=collection_id,
        data=json_body(),
    )
    return jsonify(envelope(
        normalize_collection(collection),
        message="Collection updated successfully",
    )), 200


@v1_bp.route("/collections/<collection_id>", methods=["DELETE"])
@author_required
def delete_collection(collection_id):
    collection_service.delete_collection(collection_id=collection_id)
    return jsonify(envelope(message="Collection deleted successfully")), 200


@v1_bp.route("/collections/<collection_id>/items", methods=["POST"])
@author_required
def create_collection_item(collection_id):
    item = collection_service.add_collection_item(
        collection_id=collection_id,
        data=json_body(),
    )
    return jsonify(envelope(
        normalize_collection_item(item),
        message="Collection item created successfully",
    )), 201
