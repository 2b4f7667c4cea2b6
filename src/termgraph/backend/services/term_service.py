"""Term insertion service — builds the SKOS update and sends it to the store."""

from __future__ import annotations

import logging
from typing import Callable

from termgraph.errors import TransportError, UpstreamStatusError, ValidationError
from termgraph.models import Term
from termgraph.sparql import (
    build_insert_term,
    is_valid_iri,
    new_term_id,
    root_uri,
)
from termgraph.store import StoreClient, StoreConfig

logger = logging.getLogger(__name__)


class TermService:
    """Insert taxonomy terms into the store."""

    FAILURE_MESSAGE = "Failed to insert Term into GraphDB."
    UNEXPECTED_STATUS_MESSAGE = (
        "Term might have been inserted, but received unexpected status."
    )

    def __init__(
        self,
        config: StoreConfig,
        id_factory: Callable[[], str] = new_term_id,
    ) -> None:
        self.config = config
        self.id_factory = id_factory

    def build_term(
        self,
        label: str | None,
        comment: str | None = None,
        parent_id: str | None = None,
    ) -> Term:
        """Validate the input and mint a new :class:`Term`."""
        if not label or not isinstance(label, str):
            raise ValidationError("Term label is required.")
        if parent_id and not (isinstance(parent_id, str) and is_valid_iri(parent_id)):
            raise ValidationError("Parent id must be an absolute IRI.")

        term_id = self.id_factory()
        return Term(
            id=term_id,
            uri=f"{self.config.base_uri}{term_id}",
            label=label,
            comment=str(comment) if comment else None,
            parent=parent_id or root_uri(self.config.base_uri),
        )

    def insert_term(
        self,
        label: str | None,
        comment: str | None = None,
        parent_id: str | None = None,
    ) -> Term:
        """Write a new term and return it once the store acknowledges it.

        Raises
        ------
        ValidationError
            If *label* is missing or empty, or *parent_id* is not an IRI.
            Nothing is sent.
        UpstreamStatusError
            If the store answers with anything but ``204 No Content``.
        TransportError
            If the store is unreachable or reports an error.
        """
        term = self.build_term(label, comment, parent_id)
        update = build_insert_term(term)
        logger.info("Sending SPARQL update for term %s", term.uri)
        logger.debug("SPARQL update:\n%s", update)

        try:
            with StoreClient(self.config) as client:
                reply = client.update(update)
        except TransportError as exc:
            raise exc.with_message(self.FAILURE_MESSAGE) from exc

        if reply.status_code != 204:
            logger.warning(
                "GraphDB returned unexpected status code: %s", reply.status_code,
            )
            raise UpstreamStatusError(
                self.UNEXPECTED_STATUS_MESSAGE, reply.status_code,
            )

        logger.info("Term %s inserted successfully", term.id)
        return term
