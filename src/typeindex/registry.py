"""Type index registry: creating the index documents and loading them.

``initialize_registry`` runs four sequential remote steps (create listed
index, link it from the profile, create unlisted index, link it from the
preferences document). Nothing is rolled back when a later step fails, so a
profile can end up partially linked; ``load_registry`` copes with that by
only fetching the slots that have a URI.

Index documents are shared remote resources with no versioning. Two callers
writing the same index concurrently can lose each other's updates, and a
loaded graph can be stale by the time it is read.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx
import structlog
from rdflib import URIRef

from typeindex.config import Settings
from typeindex.errors import (
    ConfigurationError,
    ErrorCode,
    RemoteOperationError,
    TypeIndexError,
)
from typeindex.graphs import parse_graph, to_nt
from typeindex.models.profile import TypeIndexState
from typeindex.vocab import SOLID

if TYPE_CHECKING:
    from rdflib import Graph

    from typeindex.client import DocumentClientProtocol
    from typeindex.models.profile import Profile

log = structlog.get_logger()

LISTED_INDEX_BODY = f"<> a <{SOLID.TypeIndex}>, <{SOLID.ListedDocument}> ."
UNLISTED_INDEX_BODY = f"<> a <{SOLID.TypeIndex}>, <{SOLID.UnlistedDocument}> ."


def default_container(web_id: str) -> str:
    """Parent collection of the profile document.

    ``https://alice.example/profile/card#me`` -> ``https://alice.example/profile/``
    """
    if not web_id:
        raise ConfigurationError("No location specified for type index creation")
    container = re.sub(r"/[^/]*/?$", "", web_id.replace("\\", "/")) + "/"
    try:
        url = httpx.URL(container)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(
            f"Cannot derive a type index container from {web_id!r}"
        ) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Cannot derive a type index container from {web_id!r}")
    return container


def is_listed_type_index(graph: Graph) -> bool:
    """True if the parsed index declares itself a ``solid:ListedDocument``."""
    return (None, None, SOLID.ListedDocument) in graph


def is_unlisted_type_index(graph: Graph) -> bool:
    """True if the parsed index declares itself a ``solid:UnlistedDocument``."""
    return (None, None, SOLID.UnlistedDocument) in graph


async def _create_index(
    client: DocumentClientProtocol,
    container_uri: str,
    body: str,
    slug: str,
    headers: Mapping[str, str] | None,
    code: ErrorCode,
    label: str,
) -> tuple[str, Graph]:
    try:
        created = await client.create(container_uri, body, slug, headers=headers)
    except TypeIndexError as exc:
        raise RemoteOperationError(
            code, f"Could not create {label} index document: {exc.message}", exc.recoverable
        ) from exc
    return created.uri, parse_graph(body, created.uri)


async def _link_index(
    client: DocumentClientProtocol,
    document_uri: str,
    web_id: str,
    predicate: URIRef,
    index_uri: str,
    headers: Mapping[str, str] | None,
    code: ErrorCode,
    label: str,
) -> None:
    link = to_nt((URIRef(web_id), predicate, URIRef(index_uri)))
    try:
        await client.patch(document_uri, [], [link], headers=headers)
    except TypeIndexError as exc:
        raise RemoteOperationError(
            code, f"Could not update {label}: {exc.message}", exc.recoverable
        ) from exc


async def initialize_registry(
    profile: Profile,
    client: DocumentClientProtocol,
    container_uri: str | None = None,
    *,
    settings: Settings | None = None,
    headers: Mapping[str, str] | None = None,
) -> Profile:
    """Create the listed (and, with a preferences document, unlisted) index.

    Returns a new profile whose slots hold the new index URIs and graphs
    parsed from the bodies that were posted.
    """
    settings = settings or Settings()
    container_uri = container_uri or default_container(profile.web_id)

    public_uri, public_graph = await _create_index(
        client,
        container_uri,
        LISTED_INDEX_BODY,
        settings.registry.public_index_slug,
        headers,
        ErrorCode.PUBLIC_INDEX_CREATE_FAILED,
        "public",
    )
    await _link_index(
        client,
        profile.document_uri,
        profile.web_id,
        SOLID.publicTypeIndex,
        public_uri,
        headers,
        ErrorCode.PROFILE_UPDATE_FAILED,
        "profile",
    )
    profile = profile.with_index(True, TypeIndexState(uri=public_uri, graph=public_graph))
    log.info("type_index_initialized", web_id=profile.web_id, listed=True, uri=public_uri)

    if profile.preferences_uri is None:
        log.info("type_index_private_skipped", web_id=profile.web_id, reason="no_preferences")
        return profile

    private_uri, private_graph = await _create_index(
        client,
        container_uri,
        UNLISTED_INDEX_BODY,
        settings.registry.private_index_slug,
        headers,
        ErrorCode.PRIVATE_INDEX_CREATE_FAILED,
        "private",
    )
    await _link_index(
        client,
        profile.preferences_uri,
        profile.web_id,
        SOLID.privateTypeIndex,
        private_uri,
        headers,
        ErrorCode.PREFERENCES_UPDATE_FAILED,
        "preferences",
    )
    profile = profile.with_index(False, TypeIndexState(uri=private_uri, graph=private_graph))
    log.info("type_index_initialized", web_id=profile.web_id, listed=False, uri=private_uri)
    return profile


async def load_registry(
    profile: Profile,
    client: DocumentClientProtocol,
    *,
    headers: Mapping[str, str] | None = None,
) -> Profile:
    """Fetch the listed and unlisted index documents into the profile.

    Both documents are requested concurrently. A document that fails to
    load leaves its slot without a graph; it does not fail the call.
    """
    uris = [state.uri for state in (profile.listed, profile.unlisted) if state.uri is not None]
    loaded = await client.fetch_graphs(uris, headers=headers)

    profile = profile.without_index_graphs()
    for item in loaded:
        profile = profile.with_index_graph(item.uri, item.graph)

    log.debug(
        "type_index_loaded",
        web_id=profile.web_id,
        requested=len(uris),
        loaded=len(loaded),
    )
    return profile
