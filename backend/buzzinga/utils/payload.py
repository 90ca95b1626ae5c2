from flask import request
from buzzinga.domain.exceptions import ValidationError


def json_body():
    """
    The request's JSON object body; an empty or missing body is ``{}``.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    return data
