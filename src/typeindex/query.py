"""Read registrations for a class out of loaded type index graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rdflib import URIRef

from typeindex.models.registration import IndexRegistration, LocationType
from typeindex.vocab import SOLID

if TYPE_CHECKING:
    from rdflib import Graph

    from typeindex.models.profile import Profile

# Checked in this order for every matching subject
_LOCATION_PREDICATES = (
    (SOLID.instance, LocationType.INSTANCE),
    (SOLID.instanceContainer, LocationType.CONTAINER),
)


def registrations_from_graph(
    graph: Graph | None, rdf_class: str, is_listed: bool
) -> list[IndexRegistration]:
    """Registrations in ``graph`` whose subject points at ``rdf_class``.

    Any triple with the class as its object marks a registration subject.
    Each ``solid:instance`` / ``solid:instanceContainer`` object of that
    subject yields one registration, in the order the graph reports them.
    """
    if graph is None:
        return []

    class_node = URIRef(str(rdf_class))
    registrations: list[IndexRegistration] = []
    for subject in graph.subjects(None, class_node):
        for predicate, location_type in _LOCATION_PREDICATES:
            for location in graph.objects(subject, predicate):
                registrations.append(
                    IndexRegistration(
                        registration_uri=str(subject),
                        rdf_class=str(class_node),
                        location_type=location_type,
                        location_uri=str(location),
                        is_listed=is_listed,
                    )
                )
    return registrations


def registrations_for_class(profile: Profile, rdf_class: str) -> list[IndexRegistration]:
    """All registrations for ``rdf_class``, listed index first."""
    return registrations_from_graph(
        profile.listed.graph, rdf_class, is_listed=True
    ) + registrations_from_graph(profile.unlisted.graph, rdf_class, is_listed=False)
