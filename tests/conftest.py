"""Shared fixtures: a mocked ``requests.Session`` standing in for the store."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests


def _make_response(status_code, text="", json_data=None, headers=None):
    """Build a mock :class:`requests.Response` with the given status."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.text = text
    resp.headers = headers or {}
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=resp,
        )
    else:
        resp.raise_for_status = MagicMock()
    return resp


@pytest.fixture()
def store_response():
    """Factory for mock store responses."""
    return _make_response


@pytest.fixture()
def mock_session():
    """Patch the store client's session; yields the session mock."""
    with patch("termgraph.store.requests.Session") as mock_session_cls:
        yield mock_session_cls.return_value


@pytest.fixture()
def graph_result():
    """A SPARQL JSON result with three rows; the second has no source."""
    return {
        "head": {
            "vars": ["node", "label", "comment", "source", "relationshipType"],
        },
        "results": {
            "bindings": [
                {
                    "node": {"type": "uri", "value": "http://example.org/Fruit"},
                    "label": {"type": "literal", "value": "Fruit"},
                    "source": {"type": "uri", "value": "http://example.org/Root"},
                    "relationshipType": {
                        "type": "uri",
                        "value": "http://www.w3.org/2004/02/skos/core#narrower",
                    },
                },
                {
                    "node": {"type": "uri", "value": "http://example.org/Root"},
                    "label": {"type": "literal", "value": "Root"},
                },
                {
                    "node": {"type": "uri", "value": "http://example.org/Apple"},
                    "label": {"type": "literal", "value": "Apple"},
                    "comment": {"type": "literal", "value": "A fruit"},
                    "source": {"type": "uri", "value": "http://example.org/Fruit"},
                    "relationshipType": {
                        "type": "uri",
                        "value": "http://www.w3.org/2004/02/skos/core#narrower",
                    },
                },
            ],
        },
    }
