from __future__ import annotations

import httpx
from pydantic import BaseModel, field_validator

from typeindex.models.registration import LocationType


def _validate_iri(v: str, name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{name} must not be empty")
    try:
        scheme = httpx.URL(v).scheme
    except httpx.InvalidURL:
        raise ValueError(f"{name} is not a valid IRI: {v!r}") from None
    if not scheme:
        raise ValueError(f"{name} must be an absolute IRI: {v!r}")
    return v


class RegisterTypeInput(BaseModel):
    rdf_class: str
    location_uri: str
    location_type: LocationType = LocationType.CONTAINER
    is_listed: bool = False

    @field_validator("rdf_class")
    @classmethod
    def validate_rdf_class(cls, v: str) -> str:
        return _validate_iri(v, "rdf_class")

    @field_validator("location_uri")
    @classmethod
    def validate_location_uri(cls, v: str) -> str:
        return _validate_iri(v, "location_uri")


class UnregisterTypeInput(BaseModel):
    rdf_class: str
    is_listed: bool = False
    location_uri: str | None = None

    @field_validator("rdf_class")
    @classmethod
    def validate_rdf_class(cls, v: str) -> str:
        return _validate_iri(v, "rdf_class")

    @field_validator("location_uri")
    @classmethod
    def validate_location_uri(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _validate_iri(v, "location_uri")
