"""Term insertion route — /insert-term."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from termgraph.backend.services.term_service import TermService

terms_bp = Blueprint("terms", __name__)


def _get_svc() -> TermService:
    return TermService(current_app.config["STORE"])


@terms_bp.route("/insert-term", methods=["POST"])
def insert_term():
    """Insert a taxonomy term under its parent (or under Root).

    Errors raised by the service are rendered by the app's error handlers.
    """
    data = request.get_json(silent=True) or {}
    term = _get_svc().insert_term(
        label=data.get("label"),
        comment=data.get("comment"),
        parent_id=data.get("parentId"),
    )
    return jsonify({
        "message": "Term inserted successfully!",
        "termId": term.id,
    }), 200
