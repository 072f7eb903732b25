from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from rdflib import Graph


class CreatedDocument(BaseModel):
    """Result of POSTing a new document into a container."""

    uri: str  # absolute, resolved from the Location header


class LoadedGraph(BaseModel):
    """A fetched document parsed into a graph."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    uri: str
    graph: Graph
