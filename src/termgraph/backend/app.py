"""Flask application factory for the termgraph backend API."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from termgraph.backend.config import Config
from termgraph.errors import TermGraphError, error_response
from termgraph.store import StoreConfig

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register consistent JSON error handlers."""

    @app.errorhandler(TermGraphError)
    def termgraph_error(exc):
        payload, status = error_response(exc)
        return jsonify(payload), status

    @app.errorhandler(400)
    def bad_request(exc):
        return jsonify({"error": str(exc.description)}), 400

    @app.errorhandler(404)
    def not_found(exc):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(exc):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return jsonify({"error": str(exc.description)}), exc.code

    @app.errorhandler(Exception)
    def unhandled(exc):
        app.logger.exception("Unhandled exception")
        return jsonify({"error": "Internal server error"}), 500


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    config_class:
        Configuration class (default :class:`Config`).

    Returns
    -------
    Flask
        Configured Flask application.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # ── CORS ──────────────────────────────────────────────────────────
    CORS(app, origins=app.config["CORS_ORIGINS"])

    # ── Store ─────────────────────────────────────────────────────────
    store = StoreConfig.from_mapping(app.config)
    app.config["STORE"] = store
    logger.info("GraphDB SPARQL update endpoint: %s", store.update_endpoint)

    # ── Blueprints ────────────────────────────────────────────────────
    from termgraph.backend.routes.graph import graph_bp
    from termgraph.backend.routes.terms import terms_bp

    app.register_blueprint(terms_bp)
    app.register_blueprint(graph_bp)

    # ── Error handlers ────────────────────────────────────────────────
    register_error_handlers(app)

    # ── Health check ──────────────────────────────────────────────────
    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=Config.PORT, debug=True)
