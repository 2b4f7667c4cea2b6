"""SPARQL construction and result flattening — pure-library module (no Flask dependency).

This module holds everything that turns request data into SPARQL text
and SPARQL JSON results into graph snapshots:

* :func:`escape_literal` for values embedded in ``"..."`` literals.
* :func:`build_insert_term` for the ``INSERT DATA`` block of a new term.
* :func:`build_graph_query` for the fixed graph ``SELECT``.
* :func:`flatten_bindings` for reshaping result rows into nodes and edges.

All HTTP communication lives in :mod:`termgraph.store`.
"""

from __future__ import annotations

import re
import uuid
from typing import Any

from rdflib import URIRef
from rdflib.namespace import SKOS

from termgraph.models import GraphEdge, GraphNode, GraphSnapshot, Term

TERM_ID_PREFIX = "Term_"
ROOT_NAME = "Root"
SKOS_NS = str(SKOS)

# Characters excluded from IRIREF in the SPARQL grammar
_IRI_INVALID = re.compile(r"[<>\"{}|^`\\\x00-\x20]")
_IRI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

# Applied in order: the backslash must go first so that the backslashes
# introduced by the later substitutions are not escaped again.
_LITERAL_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)


def escape_literal(value: str | None) -> str | None:
    """Escape *value* for use inside a double-quoted SPARQL literal.

    ``None`` and the empty string are returned unchanged.
    """
    if not value:
        return value
    for char, replacement in _LITERAL_ESCAPES:
        value = value.replace(char, replacement)
    return value


def new_term_id() -> str:
    """Return a fresh term identifier such as ``Term_3f2a...``."""
    return f"{TERM_ID_PREFIX}{uuid.uuid4().hex}"


def is_valid_iri(value: str) -> bool:
    """True if *value* is an absolute IRI that can be written as ``<...>``."""
    return bool(_IRI_SCHEME.match(value)) and not _IRI_INVALID.search(value)


def root_uri(base_uri: str) -> str:
    """URI of the concept that parentless terms are attached to."""
    return f"{base_uri}{ROOT_NAME}"


def build_insert_term(term: Term) -> str:
    """Build the ``INSERT DATA`` update for *term*.

    The block always holds a ``skos:prefLabel`` and a ``skos:narrower``
    link from the parent; ``skos:note`` is added only for a non-empty
    comment.
    """
    label = escape_literal(term.label)
    comment = escape_literal(term.comment)
    # n3() refuses IRIs with characters that would break out of <...>
    uri = URIRef(term.uri).n3()
    parent = URIRef(term.parent).n3()

    statements = [f'{uri} skos:prefLabel "{label}" .']
    if comment:
        statements.append(f'{uri} skos:note "{comment}" .')
    statements.append(f"{parent} skos:narrower {uri} .")

    body = "\n".join(f"    {s}" for s in statements)
    return (
        f"PREFIX skos: <{SKOS_NS}>\n"
        "INSERT DATA {\n"
        f"{body}\n"
        "}\n"
    )


def build_graph_query(base_uri: str) -> str:
    """Build the query returning every graph node with its incoming relation.

    ``?nodeType`` is not bound by any pattern, so only the ``Root``
    branches of the filter can match.
    """
    return f"""PREFIX skos: <{SKOS_NS}>
PREFIX cm: <{base_uri}>

SELECT ?node ?label ?comment ?source ?relationshipType
WHERE {{
  OPTIONAL {{ ?node skos:prefLabel ?label }} .

  OPTIONAL {{ ?node skos:note ?comment }} .

  OPTIONAL {{
    ?source skos:narrower ?node .
    BIND(skos:narrower AS ?relationshipType)
  }}

  FILTER(
    CONTAINS(STR(?nodeType), "Term") ||
    CONTAINS(STR(?nodeType), "Role") ||
    CONTAINS(STR(?node), "Root") ||
    EXISTS {{ cm:Root skos:narrower ?node }}
  )
}}
"""


def _value(binding: dict[str, Any], var: str) -> str:
    cell = binding.get(var)
    if not cell:
        return ""
    if not isinstance(cell, dict):
        raise ValueError(f"Binding for ?{var} is not a result cell: {cell!r}")
    return str(cell.get("value", ""))


def flatten_bindings(json_result: dict[str, Any]) -> GraphSnapshot:
    """Flatten SPARQL JSON results into a :class:`GraphSnapshot`.

    Every row yields one node, so a node reached through several
    relations is repeated.  A row yields an edge only when ``?source``
    is bound.

    Raises
    ------
    ValueError
        If *json_result* is not a SPARQL JSON results document, or one
        of its rows or cells is malformed.
    """
    try:
        bindings: list[dict[str, Any]] = json_result["results"]["bindings"]
    except (KeyError, TypeError) as exc:
        raise ValueError("Not a SPARQL JSON results document") from exc
    if not isinstance(bindings, list):
        raise ValueError("SPARQL JSON bindings are not a list")

    snapshot = GraphSnapshot()
    for binding in bindings:
        if not isinstance(binding, dict):
            raise ValueError(f"SPARQL JSON result row is not an object: {binding!r}")
        node_id = _value(binding, "node")
        snapshot.nodes.append(
            GraphNode(
                id=node_id,
                label=_value(binding, "label"),
                comment=_value(binding, "comment"),
            )
        )
        if binding.get("source"):
            snapshot.edges.append(
                GraphEdge(
                    source=_value(binding, "source"),
                    target=node_id,
                    type=_value(binding, "relationshipType"),
                )
            )
    return snapshot
