import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException
from buzzinga.domain.exceptions import CmsError
from buzzinga.normalizers.envelope import envelope

logger = logging.getLogger(__name__)


def error_response(message, status_code):
    response = jsonify(envelope(success=False, message=message))
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(CmsError)
    def handle_cms_error(error):
        logger.warning("%s: %s", type(error).__name__, error.message)
        return error_response(error.message, error.status_code)

    @app.errorhandler(404)
    def handle_not_found(error):
        return error_response("Route not found", 404)

    @app.errorhandler(413)
    def handle_too_large(error):
        return error_response("File too large", 413)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error")
        return error_response("An unexpected error occurred", 500)
