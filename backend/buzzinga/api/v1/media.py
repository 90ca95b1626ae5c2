from flask import g, request, jsonify
from buzzinga.application import media as media_service
from buzzinga.normalizers.envelope import envelope
from buzzinga.normalizers.media import normalize_media
from buzzinga.normalizers.pagination import normalize_pagination
from buzzinga.utils.decorators import author_required
from buzzinga.utils.pagination import parse_offset_pagination
from buzzinga.utils.payload import json_body
from . import v1_bp


@v1_bp.route("/media", methods=["GET"])
@author_required
def list_media():
    limit, offset = parse_offset_pagination(request.args)
    items, total = media_service.list_media(
        mime_type=request.args.get("mimeType"),
        limit=limit,
        offset=offset,
    )
    return jsonify(normalize_pagination(
        items,
        normalize_media,
        total=total,
        limit=limit,
        offset=offset,
    ))


@v1_bp.route("/media/<media_id>", methods=["GET"])
@author_required
def get_media(media_id):
    return jsonify(envelope(normalize_media(media_service.get_media(media_id=media_id))))


@v1_bp.route("/media/upload", methods=["POST"])
@author_required
def upload_media():
    media = media_service.upload_media(
        file=request.files.get("file"),
        uploaded_by=g.current_user.id,
        alt=request.form.get("alt"),
        caption=request.form.get("caption"),
    )
    return jsonify(envelope(normalize_media(media), message="File uploaded successfully")), 201


@v1_bp.route("/media/<media_id>", methods=["PUT"])
@author_required
def update_media(media_id):
    media = media_service.update_media(media_id=media_id, data=json_body())
    return jsonify(envelope(normalize_media(media), message="Media updated successfully")), 200


@v1_bp.route("/media/<media_id>", methods=["DELETE"])
@author_required
def delete_media(media_id):
    media_service.delete_media(media_id=media_id)
    return jsonify(envelope(message="Media deleted successfully")), 200
