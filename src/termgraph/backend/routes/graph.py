"""Graph retrieval route — /graph."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from termgraph.backend.services.graph_service import GraphService

graph_bp = Blueprint("graph", __name__)


@graph_bp.route("/graph", methods=["GET"])
def get_graph():
    """Return every node and hierarchy edge currently in the store."""
    snapshot = GraphService(current_app.config["STORE"]).fetch_graph()
    return jsonify(snapshot.model_dump())
