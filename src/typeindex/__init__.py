"""Solid type index registry.

Discover and maintain where a WebID profile keeps instances of each RDF
class, via its listed (public) and unlisted (private) type index documents.
"""

from __future__ import annotations

from typeindex.client import DocumentClient, DocumentClientProtocol, build_http_client
from typeindex.config import Settings
from typeindex.errors import (
    ConfigurationError,
    ErrorCode,
    InvalidRequestError,
    RemoteOperationError,
    TypeIndexError,
)
from typeindex.models import IndexRegistration, LocationType, Profile, TypeIndexState
from typeindex.query import registrations_for_class
from typeindex.registration import RegistrationEngine
from typeindex.registry import (
    initialize_registry,
    is_listed_type_index,
    is_unlisted_type_index,
    load_registry,
)

__all__ = [
    "DocumentClient",
    "DocumentClientProtocol",
    "build_http_client",
    "Settings",
    "ConfigurationError",
    "ErrorCode",
    "InvalidRequestError",
    "RemoteOperationError",
    "TypeIndexError",
    "IndexRegistration",
    "LocationType",
    "Profile",
    "TypeIndexState",
    "registrations_for_class",
    "RegistrationEngine",
    "initialize_registry",
    "is_listed_type_index",
    "is_unlisted_type_index",
    "load_registry",
]
