from functools import wraps
from flask import g
from flask_jwt_extended import current_user, jwt_required
from buzzinga.domain.exceptions import Unauthenticated


def author_required(fn):
    """
    Require a valid access token for an active user and expose it as
    ``g.current_user``. Services receive the id explicitly from there.
    """
    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        user = current_user
        if user is None:
            raise Unauthenticated()

        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper
