from flask import jsonify
from werkzeug.exceptions import HTTPException
from sqlalchemy.exc import SQLAlchemyError
import logging
from app.libs.errors import APIError, SearchUnavailable

logger = logging.getLogger(__name__)


def handle_error(e):
    if isinstance(e, SearchUnavailable):
        logger.warning(f"Search unavailable: {e.message}")
        return jsonify(e.to_dict()), e.status_code
    elif isinstance(e, APIError):
        logger.error(f"API Error: {e.message}")
        return jsonify(e.to_dict()), e.status_code
    elif isinstance(e, HTTPException):
        logger.error(f"HTTP Error: {e.description}")
        body = {"message": e.description}
        # flask-smorest attaches marshmallow messages to 422 aborts
        messages = (getattr(e, "data", None) or {}).get("messages")
        if messages:
            body["errors"] = messages
        return jsonify(body), e.code
    elif isinstance(e, SQLAlchemyError):
        logger.exception("Database error")
        return jsonify({"message": "Database error"}), 500
    else:
        logger.exception("Unhandled exception")
        return jsonify({"message": "Internal server error"}), 500
