from __future__ import annotations

from typeindex.models.documents import CreatedDocument, LoadedGraph
from typeindex.models.profile import Profile, TypeIndexState
from typeindex.models.registration import IndexRegistration, LocationType
from typeindex.models.requests import RegisterTypeInput, UnregisterTypeInput

__all__ = [
    # profile
    "Profile",
    "TypeIndexState",
    # registration
    "IndexRegistration",
    "LocationType",
    # documents
    "CreatedDocument",
    "LoadedGraph",
    # requests
    "RegisterTypeInput",
    "UnregisterTypeInput",
]
