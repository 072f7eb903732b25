"""HTTP document client for Solid-style storage.

Creates documents in containers (POST + Slug), applies triple diffs
(PATCH with a SPARQL Update body), and fetches documents parsed into rdflib
graphs. Every failure surfaces as a ``TypeIndexError``:

  * 404                -> DOCUMENT_NOT_FOUND (not recoverable)
  * other non-2xx      -> REQUEST_FAILED (recoverable only for 5xx)
  * transport failures -> REQUEST_FAILED (recoverable)
  * unparseable RDF    -> PARSE_FAILED (not recoverable)

There are no retries here. Timeouts come from the underlying
``httpx.AsyncClient``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Protocol

import httpx
import structlog

from typeindex.config import ClientSettings
from typeindex.errors import ErrorCode, TypeIndexError
from typeindex.graphs import parse_graph, rdf_format_for
from typeindex.models.documents import CreatedDocument, LoadedGraph
from typeindex.vocab import LDP

log = structlog.get_logger()

_SPARQL_UPDATE = "application/sparql-update"


class DocumentClientProtocol(Protocol):
    async def create(
        self,
        container_uri: str,
        body: str,
        slug: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> CreatedDocument: ...

    async def patch(
        self,
        document_uri: str,
        delete_triples: Sequence[str],
        insert_triples: Sequence[str],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> None: ...

    async def fetch_graphs(
        self,
        uris: Sequence[str],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> list[LoadedGraph]: ...


def build_http_client(settings: ClientSettings | None = None) -> httpx.AsyncClient:
    settings = settings or ClientSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


def _merge_headers(
    defaults: Mapping[str, str], overrides: Mapping[str, str] | None
) -> httpx.Headers:
    """Defaults overridden case-insensitively by caller-supplied headers."""
    merged = httpx.Headers(defaults)
    if overrides:
        merged.update(overrides)
    return merged


def sparql_update_body(delete_triples: Sequence[str], insert_triples: Sequence[str]) -> str:
    """SPARQL Update applying ``delete_triples`` then ``insert_triples``.

    Empty halves are omitted.
    """
    parts = []
    if delete_triples:
        parts.append("DELETE DATA { " + " ".join(delete_triples) + " }")
    if insert_triples:
        parts.append("INSERT DATA { " + " ".join(insert_triples) + " }")
    return " ;\n".join(parts)


class DocumentClient:
    """Thin async wrapper over ``httpx.AsyncClient`` for RDF documents."""

    def __init__(self, client: httpx.AsyncClient, settings: ClientSettings | None = None) -> None:
        self._client = client
        self._settings = settings or ClientSettings()

    async def create(
        self,
        container_uri: str,
        body: str,
        slug: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> CreatedDocument:
        """POST a Turtle document into ``container_uri``.

        The resulting URI is taken from the ``Location`` header, resolved
        against the container.
        """
        request_headers = _merge_headers(
            {
                "Content-Type": "text/turtle",
                "Slug": slug,
                "Link": f'<{LDP.Resource}>; rel="type"',
            },
            headers,
        )
        response = await self._send("POST", container_uri, request_headers, body)
        location = response.headers.get("location")
        if not location:
            raise TypeIndexError(
                ErrorCode.REQUEST_FAILED,
                f"Server did not return a Location for the document created in {container_uri}",
                recoverable=False,
            )
        uri = str(httpx.URL(container_uri).join(location))
        log.info("document_created", container=container_uri, uri=uri)
        return CreatedDocument(uri=uri)

    async def patch(
        self,
        document_uri: str,
        delete_triples: Sequence[str],
        insert_triples: Sequence[str],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        request_headers = _merge_headers({"Content-Type": _SPARQL_UPDATE}, headers)
        body = sparql_update_body(delete_triples, insert_triples)
        await self._send("PATCH", document_uri, request_headers, body)
        log.info(
            "document_patched",
            uri=document_uri,
            deleted=len(delete_triples),
            inserted=len(insert_triples),
        )

    async def fetch_graph(
        self, uri: str, *, headers: Mapping[str, str] | None = None
    ) -> LoadedGraph:
        request_headers = _merge_headers({"Accept": self._settings.accept}, headers)
        response = await self._send("GET", uri, request_headers)
        fmt = rdf_format_for(response.headers.get("content-type"))
        try:
            graph = parse_graph(response.text, uri, fmt)
        except Exception as exc:
            # Each rdflib parser plugin raises its own error types
            raise TypeIndexError(
                ErrorCode.PARSE_FAILED,
                f"Could not parse {uri} as {fmt}: {exc}",
                recoverable=False,
            ) from exc
        return LoadedGraph(uri=uri, graph=graph)

    async def fetch_graphs(
        self,
        uris: Sequence[str],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> list[LoadedGraph]:
        """Fetch several documents concurrently.

        Documents that fail to load are logged and left out of the result;
        the order of the remaining ones follows ``uris``.
        """
        results = await asyncio.gather(
            *(self.fetch_graph(uri, headers=headers) for uri in uris),
            return_exceptions=True,
        )
        loaded: list[LoadedGraph] = []
        for uri, result in zip(uris, results, strict=True):
            if isinstance(result, TypeIndexError):
                log.warning(
                    "document_load_failed",
                    uri=uri,
                    code=result.code,
                    reason=result.message,
                )
                continue
            if isinstance(result, BaseException):
                raise result
            loaded.append(result)
        return loaded

    async def _send(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        content: str | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, uri, headers=headers, content=content)
        except httpx.HTTPError as exc:
            log.warning("request_error", method=method, uri=uri, exc_info=True)
            raise TypeIndexError(
                ErrorCode.REQUEST_FAILED,
                f"{method} {uri} failed: {exc}",
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise TypeIndexError(
                ErrorCode.DOCUMENT_NOT_FOUND,
                f"Document not found: {uri}",
                recoverable=False,
            )
        if not response.is_success:
            raise TypeIndexError(
                ErrorCode.REQUEST_FAILED,
                f"{method} {uri} returned HTTP {response.status_code}",
                recoverable=response.status_code >= 500,
            )
        return response
