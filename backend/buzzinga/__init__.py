import os
from flask import Flask, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name
from .extensions import db, migrate, jwt
from .logging_config import configure_logging
from .api.v1 import v1_bp
from .middleware.identity import identity_middleware
from .middleware.request_logging import request_logging_middleware
from .errors import register_error_handlers
from .cli import register_commands
from .utils.media import upload_folder

OPENAPI_URL = "/openapi/cms.yaml"
SWAGGER_URL = "/swagger"


def _register_docs(app: Flask) -> None:
    docs_dir = os.path.join(app.root_path, "api", "v1")

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        return send_from_directory(docs_dir, "cms_openapi.yaml", mimetype="application/yaml")

    app.register_blueprint(
        get_swaggerui_blueprint(
            SWAGGER_URL,
            OPENAPI_URL,
            config={
                "app_name": "Buzzinga CMS API",
                "deepLinking": True,
                "persistAuthorization": True,
            },
        ),
        url_prefix=SWAGGER_URL,
    )


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    from . import models  # noqa: F401  register every table on db.metadata

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    identity_middleware(jwt)
    request_logging_middleware(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Uploaded media and API docs (PUBLIC)
    # -------------------------------------------------
    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploaded_media")
    def serve_upload(filename):
        return send_from_directory(upload_folder(), filename)

    _register_docs(app)

    return app
