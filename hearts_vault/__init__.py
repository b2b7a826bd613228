from dotenv import load_dotenv
from flask import Flask
from flasgger import Swagger

from .config import Config
from .errors import register_error_handlers
from .extensions import db, migrate
from .swagger_config import swagger_template
from .middleware.request_id import init_request_id
from .middleware.cors import init_cors
from .cli import register_commands

load_dotenv()

def create_app(config_class=Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if app.config.get("SWAGGER_ENABLED"):
        Swagger(app, template=swagger_template(app))

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    from . import models  # noqa: F401

    # Middleware + errors (request id first so later hooks can log it)
    init_request_id(app)
    init_cors(app)
    register_error_handlers(app)

    # Blueprints
    from .api.submissions.routes import submissions_bp
    app.register_blueprint(submissions_bp)

    register_commands(app)

    return app
