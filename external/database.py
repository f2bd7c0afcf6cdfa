from flask_sqlalchemy import SQLAlchemy
import logging

logger = logging.getLogger(__name__)

db = SQLAlchemy()


def init_db(flask_app):
    """Bind the database extension to the Flask app"""
    db.init_app(flask_app)
    flask_app.teardown_appcontext(shutdown_session)
    logger.info("Database initialized")


def create_tables():
    import app.products.models  # noqa - registers product tables

    db.create_all()


def shutdown_session(exception=None):
    db.session.remove()
