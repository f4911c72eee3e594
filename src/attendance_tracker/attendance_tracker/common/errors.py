from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AccessDenied, AuthenticationError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map domain exceptions to JSON responses."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AccessDenied)
    def _access_denied(e: AccessDenied):
        logger.warning("access denied: %s", e)
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("unhandled error")
        if app.config.get("DEBUG"):
            return jsonify({"error": f"Internal server error: {e}"}), 500
        return jsonify({"error": "Internal server error"}), 500
