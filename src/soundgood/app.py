from flask import Flask

from soundgood.logging_config import setup_logging


def create_app() -> Flask:
    """Application factory."""
    app = Flask(__name__)
    setup_logging()

    # Register blueprints
    from soundgood.api.accounts import bp as accounts_bp
    from soundgood.api.errors import register_error_handlers
    from soundgood.api.instruments import bp as instruments_bp
    from soundgood.api.rentals import bp as rentals_bp

    app.register_blueprint(accounts_bp, url_prefix="/api/accounts")
    app.register_blueprint(instruments_bp, url_prefix="/api/instruments")
    app.register_blueprint(rentals_bp, url_prefix="/api")
    register_error_handlers(app)

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    return app


# For flask run command
app = create_app()
