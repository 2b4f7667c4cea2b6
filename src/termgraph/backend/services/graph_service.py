"""Graph retrieval service — queries the store and flattens the result."""

from __future__ import annotations

import logging

from termgraph.errors import TransportError, UpstreamStatusError
from termgraph.models import GraphSnapshot
from termgraph.sparql import build_graph_query, flatten_bindings
from termgraph.store import StoreClient, StoreConfig

logger = logging.getLogger(__name__)


class GraphService:
    """Fetch the term graph from the store."""

    FAILURE_MESSAGE = "Failed to fetch data from GraphDB."
    UNEXPECTED_STATUS_MESSAGE = (
        "Data might have been fetched, but received unexpected status."
    )

    def __init__(self, config: StoreConfig) -> None:
        self.config = config

    def fetch_graph(self) -> GraphSnapshot:
        """Run the graph query and return its nodes and edges.

        Nothing is cached: every call queries the store.
        """
        query = build_graph_query(self.config.base_uri)
        logger.debug("SPARQL query:\n%s", query)

        try:
            with StoreClient(self.config) as client:
                reply = client.select(query)
        except TransportError as exc:
            raise exc.with_message(self.FAILURE_MESSAGE) from exc

        if reply.status_code != 200:
            logger.warning(
                "GraphDB returned unexpected status code: %s", reply.status_code,
            )
            raise UpstreamStatusError(
                self.UNEXPECTED_STATUS_MESSAGE, reply.status_code,
            )

        try:
            snapshot = flatten_bindings(reply.body)
        except ValueError as exc:
            logger.error("Unusable query result from GraphDB: %s", exc)
            raise TransportError(self.FAILURE_MESSAGE) from exc

        logger.info(
            "Fetched %d records from GraphDB (%d edges)",
            len(snapshot.nodes), len(snapshot.edges),
        )
        return snapshot
