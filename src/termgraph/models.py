"""Pydantic models for terms and graph snapshots."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Term(BaseModel):
    """A taxonomy concept to be written to the store."""

    id: str
    uri: str
    label: str
    comment: str | None = None
    parent: str


class GraphNode(BaseModel):
    """One node row of a graph snapshot."""

    id: str
    label: str = ""
    comment: str = ""


class GraphEdge(BaseModel):
    """A hierarchy relation from ``source`` to ``target``."""

    source: str
    target: str
    type: str = ""


class GraphSnapshot(BaseModel):
    """Nodes and edges flattened from one graph query."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
