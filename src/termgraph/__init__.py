"""termgraph: a thin HTTP bridge between a taxonomy UI and a SPARQL store.

Main modules:
- sparql: SPARQL update/query construction, literal escaping, result flattening
- store: StoreConfig and the StoreClient for the store's query/update endpoints
- models: Term and graph snapshot models
- errors: error taxonomy and the HTTP error mapping
"""

from .errors import (
    TermGraphError,
    TransportError,
    UpstreamStatusError,
    ValidationError,
)
from .models import GraphEdge, GraphNode, GraphSnapshot, Term
from .store import StoreClient, StoreConfig
from .version import VERSION

__all__ = [
    "VERSION",
    "GraphEdge",
    "GraphNode",
    "GraphSnapshot",
    "StoreClient",
    "StoreConfig",
    "Term",
    "TermGraphError",
    "TransportError",
    "UpstreamStatusError",
    "ValidationError",
]
