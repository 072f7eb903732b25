"""Deterministic fragment identifiers for registration subjects.

A registration subject is ``<indexUri>#<fragment>``. The fragment combines a
hash of the class IRI with a hash of the location, so one class registered
at two locations gets two subjects and removing one never touches the other.
Registering the same class at the same location again yields the same
subject and the same triples.
"""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Callable

FragmentHasher = Callable[[str], str]

DEFAULT_FRAGMENT_LENGTH = 10


def short_hash(value: str, length: int = DEFAULT_FRAGMENT_LENGTH) -> str:
    """Short url-safe digest of ``value`` (truncated SHA-256)."""
    digest = hashlib.sha256(value.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")[:length]


def class_fragment(rdf_class: str, hasher: FragmentHasher = short_hash) -> str:
    return hasher(str(rdf_class))


def registration_fragment(
    rdf_class: str, location_uri: str, hasher: FragmentHasher = short_hash
) -> str:
    return f"{class_fragment(rdf_class, hasher)}-{hasher(str(location_uri))}"
