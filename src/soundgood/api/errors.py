"""Maps the service failure taxonomy onto HTTP responses."""

from flask import Flask, jsonify

from soundgood.errors import (
    LockTimeout,
    NotFoundError,
    PersistenceError,
    RejectedError,
    ValidationError,
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(RejectedError)
    def handle_rejected(e):
        return jsonify({"error": "rejected", "reason": e.reason}), 409

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(LockTimeout)
    def handle_lock_timeout(e):
        return jsonify({"error": str(e)}), 503

    @app.errorhandler(PersistenceError)
    def handle_persistence(e):
        return jsonify({"error": str(e)}), 500
