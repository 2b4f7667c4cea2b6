"""Tests for the store client."""

from __future__ import annotations

import pytest
import requests

from termgraph.errors import TransportError
from termgraph.store import StoreClient, StoreConfig

CONFIG = StoreConfig(
    url="http://graphdb.test:7200/",
    repository="repo",
    base_uri="http://example.org/",
    timeout=3.0,
)


def test_endpoints():
    assert CONFIG.query_endpoint == "http://graphdb.test:7200/repositories/repo"
    assert CONFIG.update_endpoint == (
        "http://graphdb.test:7200/repositories/repo/statements"
    )


def test_config_from_mapping():
    config = StoreConfig.from_mapping({
        "GRAPHDB_URL": "http://localhost:7200",
        "REPOSITORY_ID": "conceptual-repo",
        "BASE_URI": "http://conceptual-machines.org/",
    })
    assert config.timeout == 10.0
    assert config.update_endpoint.endswith("/conceptual-repo/statements")


def test_config_is_immutable():
    with pytest.raises(AttributeError):
        CONFIG.url = "http://elsewhere"


def test_update_sends_raw_body(mock_session, store_response):
    mock_session.post.return_value = store_response(204)

    reply = StoreClient(CONFIG).update("INSERT DATA { <urn:a> <urn:b> <urn:c> }")

    assert reply.status_code == 204
    args, kwargs = mock_session.post.call_args
    assert args[0] == CONFIG.update_endpoint
    assert kwargs["data"] == b"INSERT DATA { <urn:a> <urn:b> <urn:c> }"
    assert kwargs["headers"]["Content-Type"].startswith("application/sparql-update")
    assert kwargs["timeout"] == 3.0


def test_select_sends_query_parameter(mock_session, store_response, graph_result):
    mock_session.get.return_value = store_response(200, json_data=graph_result)

    reply = StoreClient(CONFIG).select("SELECT * WHERE { ?s ?p ?o }")

    assert reply.status_code == 200
    assert reply.body == graph_result
    args, kwargs = mock_session.get.call_args
    assert args[0] == CONFIG.query_endpoint
    assert kwargs["params"] == {"query": "SELECT * WHERE { ?s ?p ?o }"}
    assert kwargs["headers"]["Accept"] == "application/sparql-results+json"


def test_select_non_200_returns_text(mock_session, store_response):
    mock_session.get.return_value = store_response(202, text="accepted")

    reply = StoreClient(CONFIG).select("SELECT * WHERE { ?s ?p ?o }")

    assert reply.status_code == 202
    assert reply.body == "accepted"


def test_select_invalid_json_is_transport_error(mock_session, store_response):
    mock_session.get.return_value = store_response(200, text="<html>")

    with pytest.raises(TransportError) as exc_info:
        StoreClient(CONFIG).select("SELECT * WHERE { ?s ?p ?o }")
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail is None


def test_connection_refused(mock_session):
    mock_session.post.side_effect = requests.exceptions.ConnectionError(
        "Connection refused",
    )

    with pytest.raises(TransportError) as exc_info:
        StoreClient(CONFIG).update("INSERT DATA {}")
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail is None


def test_timeout(mock_session):
    mock_session.get.side_effect = requests.exceptions.Timeout("timed out")

    with pytest.raises(TransportError) as exc_info:
        StoreClient(CONFIG).select("SELECT * WHERE { ?s ?p ?o }")
    assert exc_info.value.status_code == 500


def test_store_error_status_and_text_body(mock_session, store_response):
    mock_session.post.return_value = store_response(
        400, text="MALFORMED QUERY: Lexical error",
    )

    with pytest.raises(TransportError) as exc_info:
        StoreClient(CONFIG).update("INSERT DATA {")
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "MALFORMED QUERY: Lexical error"


def test_store_error_json_body(mock_session, store_response):
    mock_session.post.return_value = store_response(
        404,
        json_data={"message": "Unknown repository"},
        headers={"content-type": "application/json"},
    )

    with pytest.raises(TransportError) as exc_info:
        StoreClient(CONFIG).update("INSERT DATA {}")
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == {"message": "Unknown repository"}


def test_store_error_without_body(mock_session, store_response):
    mock_session.post.return_value = store_response(503)

    with pytest.raises(TransportError) as exc_info:
        StoreClient(CONFIG).update("INSERT DATA {}")
    assert exc_info.value.status_code == 503
    assert exc_info.value.detail is None


def test_client_closes_session_as_context_manager(mock_session, store_response):
    mock_session.post.return_value = store_response(204)

    with StoreClient(CONFIG) as client:
        client.update("INSERT DATA {}")
    mock_session.close.assert_called_once()
