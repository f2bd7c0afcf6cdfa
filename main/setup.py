# python imports
import logging
import time

# package imports
from flask import Flask
from flask_migrate import Migrate
from flask_cors import CORS
from flask_smorest import Api

# app imports
from main.config import settings
from main.logger import setup_logging
from main.errors import handle_error
from main.middleware import RequestLogMiddleware
from main.routes import register_blueprints, register_commands, create_root_routes

logger = logging.getLogger(__name__)


def configure_app(app, overrides=None):
    """Configure Flask application"""
    app.config.from_object(settings)
    app.config["SQLALCHEMY_DATABASE_URI"] = settings.SQLALCHEMY_DATABASE_URI
    if overrides:
        app.config.update(overrides)

    from external.database import db, init_db

    init_db(app)
    Migrate(app, db)
    CORS(app, supports_credentials=True, origins=["*"])

    # Initialize Flask-Smorest API
    api = Api(app)

    # Register error handler
    app.register_error_handler(Exception, handle_error)

    return api


def create_app(overrides=None):
    """Application factory"""
    setup_logging()

    app = Flask(__name__)
    app.wsgi_app = RequestLogMiddleware(app.wsgi_app)

    # Track application start time for health checks
    app.start_time = time.time()

    api = configure_app(app, overrides)

    with app.app_context():
        register_blueprints(app, api)
        register_commands(app)
        create_root_routes(app)

        from app.search.config import InternalSearchConfig

        if InternalSearchConfig.from_settings().is_enabled():
            logger.info("Doofinder internal search enabled")
        else:
            logger.warning(
                "Doofinder internal search disabled - native product search in use"
            )

    logger.info("Application initialized")
    return app
