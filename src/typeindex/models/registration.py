from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class LocationType(StrEnum):
    """Where instances of a registered class live."""

    INSTANCE = "instance"  # a single resource
    CONTAINER = "container"  # a collection of resources


class IndexRegistration(BaseModel):
    """Single class -> location entry read out of a type index graph."""

    model_config = ConfigDict(frozen=True)

    registration_uri: str  # <indexUri>#<fragment>
    rdf_class: str
    location_type: LocationType
    location_uri: str
    is_listed: bool
