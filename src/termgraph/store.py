"""
Store client - SPARQL Protocol access to a single triple-store repository.

This module handles:
- Endpoint layout of a GraphDB-style repository (query and statements URLs)
- SELECT queries sent as GET with a ``query`` parameter
- Updates sent as a raw ``application/sparql-update`` POST body
- Mapping of network failures and store error statuses to TransportError
- Consistent logging across all store operations

No retry is attempted; an update whose outcome is unknown is never resent.

Usage:
    from termgraph.store import StoreClient, StoreConfig

    config = StoreConfig("http://localhost:7200", "conceptual-repo",
                         "http://conceptual-machines.org/")
    with StoreClient(config) as client:
        reply = client.select("SELECT ?s WHERE { ?s ?p ?o } LIMIT 10")
        reply = client.update("INSERT DATA { <urn:a> <urn:b> <urn:c> }")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from termgraph.errors import TransportError
from termgraph.version import VERSION

logger = logging.getLogger(__name__)


class MimeTypes:
    """Standard MIME types for the SPARQL protocol."""

    JSON = "application/json"
    SPARQL_JSON = "application/sparql-results+json"
    SPARQL_UPDATE = "application/sparql-update"


@dataclass(frozen=True)
class StoreConfig:
    """Process-wide store settings, fixed at startup."""

    url: str
    repository: str
    base_uri: str
    timeout: float = 10.0

    @classmethod
    def from_mapping(cls, mapping: Any) -> StoreConfig:
        """Build from a Flask config (or any mapping with the same keys)."""
        return cls(
            url=mapping["GRAPHDB_URL"],
            repository=mapping["REPOSITORY_ID"],
            base_uri=mapping["BASE_URI"],
            timeout=float(mapping.get("STORE_TIMEOUT", 10)),
        )

    @property
    def query_endpoint(self) -> str:
        return f"{self.url.rstrip('/')}/repositories/{self.repository}"

    @property
    def update_endpoint(self) -> str:
        return f"{self.query_endpoint}/statements"


@dataclass
class StoreReply:
    """Status and decoded body of a non-error store response."""

    status_code: int
    body: Any = None


class StoreClient:
    """
    Sends SPARQL queries and updates to one repository.

    Uses the standard `requests` library with one session per client.

    Attributes:
        config: The StoreConfig describing the repository
    """

    GENERIC_ERROR = "Triple-store request failed."

    def __init__(self, config: StoreConfig) -> None:
        self.config = config
        self._session = requests.Session()
        self._session.headers["User-Agent"] = f"termgraph/{VERSION} (SPARQL client)"

    def select(self, query: str) -> StoreReply:
        """
        Execute a SELECT query.

        Args:
            query: SPARQL query string

        Returns:
            StoreReply whose body is the decoded SPARQL JSON document for
            a 200 response and the raw text otherwise

        Raises:
            TransportError: If the store is unreachable, reports an error
                status, or sends a 200 body that is not JSON
        """
        logger.debug(f"Sending SPARQL query to {self.config.query_endpoint}:\n{query}")
        response = self._send(
            self._session.get,
            self.config.query_endpoint,
            params={"query": query},
            headers={"Accept": MimeTypes.SPARQL_JSON},
        )
        if response.status_code != 200:
            return StoreReply(response.status_code, response.text)

        try:
            return StoreReply(response.status_code, response.json())
        except ValueError as e:
            logger.error(f"Store returned a non-JSON query result: {e}")
            raise TransportError(self.GENERIC_ERROR) from e

    def update(self, update: str) -> StoreReply:
        """
        Execute a SPARQL update.

        Args:
            update: SPARQL update string, sent verbatim as the request body

        Returns:
            StoreReply with the response status and text

        Raises:
            TransportError: If the store is unreachable or reports an error status
        """
        logger.debug(f"Sending SPARQL update to {self.config.update_endpoint}:\n{update}")
        response = self._send(
            self._session.post,
            self.config.update_endpoint,
            data=update.encode("utf-8"),
            headers={
                "Content-Type": f"{MimeTypes.SPARQL_UPDATE}; charset=utf-8",
                "Accept": MimeTypes.JSON,
            },
        )
        return StoreReply(response.status_code, response.text)

    def close(self) -> None:
        """Close the underlying requests session."""
        self._session.close()

    def __enter__(self) -> StoreClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close session."""
        self.close()

    def _send(self, method: Any, url: str, **kwargs: Any) -> requests.Response:
        """Perform one request, translating failures to TransportError."""
        try:
            response = method(url, timeout=self.config.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            detail = _error_detail(e.response)
            logger.error(f"Store returned HTTP {status_code}: {detail}")
            raise TransportError(self.GENERIC_ERROR, status_code, detail) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Could not reach store at {url}: {e}")
            raise TransportError(self.GENERIC_ERROR) from e
        return response


def _error_detail(response: requests.Response | None) -> Any:
    """Return the store's error body: parsed JSON if declared, else text."""
    if response is None:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            pass
    return response.text or None
