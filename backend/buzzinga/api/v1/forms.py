from flask import g, request, jsonify
from buzzinga.application import forms as form_service
from buzzinga.normalizers.envelope import envelope
from buzzinga.normalizers.form import normalize_form, normalize_form_response
from buzzinga.normalizers.pagination import normalize_pagination
from buzzinga.utils.decorators import author_required
from buzzinga.utils.pagination import parse_offset_pagination
from buzzinga.utils.payload import json_body
from . import v1_bp


@v1_bp.route("/forms", methods=["GET"])
@author_required
def list_forms():
    return jsonify(envelope([
        normalize_form(form, response_count=count)
        for form, count in form_service.list_forms()
    ]))


@v1_bp.route("/forms/<form_id>", methods=["GET"])
@author_required
def get_form(form_id):
    form = form_service.get_form(form_id=form_id)
    count = form_service.count_responses(form_id=form.id)
    return jsonify(envelope(normalize_form(form, response_count=count)))


@v1_bp.route("/forms", methods=["POST"])
@author_required
def create_form():
    form = form_service.create_form(author_id=g.current_user.id, data=json_body())
    return jsonify(envelope(normalize_form(form), message="Form created successfully")), 201


@v1_bp.route("/forms/<form_id>", methods=["PUT"])
@author_required
def update_form(form_id):
    form = form_service.update_form(form_id=form_id, data=json_body())
    return jsonify(envelope(normalize_form(form), message="Form updated successfully")), 200


@v1_bp.route("/forms/<form_id>", methods=["DELETE"])
@author_required
def delete_form(form_id):
    form_service.delete_form(form_id=form_id)
    return jsonify(envelope(message="Form deleted successfully")), 200


@v1_bp.route("/forms/<form_id>/responses", methods=["GET"])
@author_required
def list_form_responses(form_id):
    limit, offset = parse_offset_pagination(request.args)
    responses, total = form_service.list_responses(form_id=form_id, limit=limit, offset=offset)

    return jsonify(normalize_pagination(
        responses,
        normalize_form_response,
        total=total,
        limit=limit,
        offset=offset,
    ))


# Public: visitors submit forms without an account
@v1_bp.route("/forms/<form_id>/responses", methods=["POST"])
def submit_form_response(form_id):
    response = form_service.submit_response(
        form_id=form_id,
        data=request.get_json(silent=True),
        ip_address=request.remote_addr,
        user_agent=request.headers.get("User-Agent"),
    )
    return jsonify(envelope(
        normalize_form_response(response),
        message="Form response submitted successfully",
    )), 201
