from flask import g, jsonify
from buzzinga.application import auth as auth_service
from buzzinga.normalizers.envelope import envelope
from buzzinga.normalizers.user import normalize_user
from buzzinga.utils.decorators import author_required
from buzzinga.utils.payload import json_body
from . import v1_bp


@v1_bp.route("/auth/register", methods=["POST"])
def register():
    data = json_body()

    user = auth_service.register_user(
        email=data.get("email"),
        password=data.get("password"),
        name=data.get("name"),
    )

    return jsonify(envelope(
        {"user": normalize_user(user), **auth_service.issue_tokens(user)},
        message="User registered successfully",
    )), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = json_body()

    user, tokens = auth_service.authenticate(
        email=data.get("email"),
        password=data.get("password"),
    )

    return jsonify(envelope(
        {"user": normalize_user(user), **tokens},
        message="Login successful",
    )), 200


@v1_bp.route("/auth/me", methods=["GET"])
@author_required
def me():
    return jsonify(envelope(normalize_user(g.current_user))), 200
