from flask import jsonify
from buzzinga.extensions import db
from buzzinga.models.user import User
from buzzinga.normalizers.envelope import envelope


def _unauthenticated(message):
    return jsonify(envelope(success=False, message=message)), 401


def identity_middleware(jwt):
    """
    Resolve the token subject into a User and answer every token failure
    with the standard 401 envelope.
    """

    @jwt.user_identity_loader
    def user_identity(user):
        return user.id if isinstance(user, User) else str(user)

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        user = db.session.get(User, jwt_data["sub"])
        if user is None or not user.is_active:
            return None
        return user

    @jwt.user_lookup_error_loader
    def user_lookup_error(_jwt_header, _jwt_data):
        return _unauthenticated("User not authenticated")

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _unauthenticated("User not authenticated")

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _unauthenticated("Invalid token")

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return _unauthenticated("Token has expired")
