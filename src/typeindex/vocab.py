"""Vocabulary terms used by type index documents."""

from __future__ import annotations

from rdflib import RDF, Namespace

SOLID_NS = "http://www.w3.org/ns/solid/terms#"
LDP_NS = "http://www.w3.org/ns/ldp#"

SOLID = Namespace(SOLID_NS)
LDP = Namespace(LDP_NS)

__all__ = [
    "SOLID_NS",
    "LDP_NS",
    "SOLID",
    "LDP",
    "RDF",
]
