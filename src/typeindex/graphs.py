"""Small rdflib helpers shared by the registry components."""

from __future__ import annotations

from collections.abc import Iterable

from rdflib import Graph
from rdflib.term import Node

Triple = tuple[Node, Node, Node]

# Content-Type (without parameters) -> rdflib parser name
_RDF_FORMATS: dict[str, str] = {
    "text/turtle": "turtle",
    "application/x-turtle": "turtle",
    "text/n3": "n3",
    "application/n-triples": "nt",
    "application/ld+json": "json-ld",
    "application/rdf+xml": "xml",
}


def rdf_format_for(content_type: str | None) -> str:
    """Pick an rdflib parser for a response Content-Type; Turtle by default."""
    if not content_type:
        return "turtle"
    media_type = content_type.split(";", 1)[0].strip().lower()
    return _RDF_FORMATS.get(media_type, "turtle")


def parse_graph(data: str, base_uri: str, fmt: str = "turtle") -> Graph:
    """Parse ``data`` with relative IRIs resolved against ``base_uri``."""
    graph = Graph()
    graph.parse(data=data, format=fmt, publicID=base_uri)
    return graph


def to_nt(triple: Triple) -> str:
    """Canonical N-Triples statement for one triple."""
    s, p, o = triple
    return f"{s.n3()} {p.n3()} {o.n3()} ."


def with_triples(graph: Graph | None, triples: Iterable[Triple]) -> Graph:
    """Return a new graph holding ``graph``'s triples plus ``triples``.

    ``graph`` itself is left untouched.
    """
    merged = Graph()
    if graph is not None:
        for triple in graph:
            merged.add(triple)
    for triple in triples:
        merged.add(triple)
    return merged
