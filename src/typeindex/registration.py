"""Registering and unregistering classes in a profile's type index.

Registering patches the in-memory index graph with the inserted triples
after the remote PATCH succeeds. Unregistering instead reloads the whole
registry after its PATCH. The reload costs one more round trip per call but
leaves the profile holding exactly what the server stored.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from typing import TYPE_CHECKING, assert_never

import pydantic
import structlog
from rdflib import URIRef

from typeindex.errors import ErrorCode, InvalidRequestError, RemoteOperationError, TypeIndexError
from typeindex.fragment import FragmentHasher, registration_fragment, short_hash
from typeindex.graphs import Triple, to_nt, with_triples
from typeindex.models.registration import LocationType
from typeindex.models.requests import RegisterTypeInput, UnregisterTypeInput
from typeindex.query import registrations_from_graph
from typeindex.registry import load_registry
from typeindex.vocab import RDF, SOLID

if TYPE_CHECKING:
    from typeindex.client import DocumentClientProtocol
    from typeindex.config import Settings
    from typeindex.models.profile import Profile

log = structlog.get_logger()


def _slot_name(is_listed: bool) -> str:
    return "Listed" if is_listed else "Unlisted"


def _check_profile(profile: Profile | None) -> Profile:
    if profile is None:
        raise InvalidRequestError(ErrorCode.PROFILE_MISSING, "No profile provided")
    if not profile.is_loaded:
        raise InvalidRequestError(ErrorCode.PROFILE_NOT_LOADED, "Profile is not loaded")
    return profile


def _parse_location_type(value: LocationType | str | None) -> LocationType:
    if value is None:
        return LocationType.CONTAINER
    try:
        return LocationType(value)
    except ValueError:
        raise InvalidRequestError(
            ErrorCode.INVALID_LOCATION_TYPE, f"Invalid location type: {value!r}"
        ) from None


def _invalid_input(exc: pydantic.ValidationError) -> InvalidRequestError:
    first = exc.errors()[0]
    message = str(first["msg"]).removeprefix("Value error, ")
    return InvalidRequestError(ErrorCode.INVALID_INPUT, message)


def _require_index_graph(profile: Profile, is_listed: bool) -> None:
    if profile.index(is_listed).graph is None:
        raise InvalidRequestError(
            ErrorCode.INDEX_MISSING, f"Profile has no {_slot_name(is_listed)} type index"
        )


def container_location(location_uri: str) -> str:
    """Container locations always end in exactly one ``/``."""
    return location_uri if location_uri.endswith("/") else location_uri + "/"


class RegistrationEngine:
    """Applies type registrations to a profile's index documents.

    The fragment hasher decides registration subject names and can be
    swapped, e.g. for a fixed-output function in tests.
    """

    def __init__(
        self, client: DocumentClientProtocol, hasher: FragmentHasher = short_hash
    ) -> None:
        self._client = client
        self._hasher = hasher

    @classmethod
    def from_settings(
        cls, client: DocumentClientProtocol, settings: Settings
    ) -> RegistrationEngine:
        hasher = functools.partial(short_hash, length=settings.registry.fragment_length)
        return cls(client, hasher)

    # ------------------------------------------------------------------
    # Triple construction
    # ------------------------------------------------------------------

    def registration_uri(self, index_uri: str, rdf_class: str, location_uri: str) -> URIRef:
        fragment = registration_fragment(rdf_class, location_uri, self._hasher)
        return URIRef(f"{index_uri}#{fragment}")

    def registration_triples(
        self,
        index_uri: str,
        rdf_class: str,
        location_uri: str,
        location_type: LocationType,
    ) -> list[Triple]:
        """The three triples that register ``rdf_class`` at ``location_uri``."""
        match location_type:
            case LocationType.INSTANCE:
                predicate = SOLID.instance
            case LocationType.CONTAINER:
                predicate = SOLID.instanceContainer
                location_uri = container_location(location_uri)
            case _:
                assert_never(location_type)

        subject = self.registration_uri(index_uri, rdf_class, location_uri)
        return [
            (subject, RDF.type, SOLID.TypeRegistration),
            (subject, SOLID.forClass, URIRef(rdf_class)),
            (subject, predicate, URIRef(location_uri)),
        ]

    # ------------------------------------------------------------------
    # Register
    # ------------------------------------------------------------------

    async def register_type(
        self,
        profile: Profile | None,
        rdf_class: str,
        location_uri: str,
        location_type: LocationType | str | None = LocationType.CONTAINER,
        is_listed: bool = False,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Profile:
        """Register ``rdf_class`` at ``location_uri`` in the chosen index.

        All arguments are validated before the registry is (re)loaded.
        """
        profile = _check_profile(profile)
        if not rdf_class or not location_uri:
            raise InvalidRequestError(
                ErrorCode.INVALID_INPUT, "Type registration requires type class and location"
            )
        parsed_type = _parse_location_type(location_type)
        try:
            request = RegisterTypeInput(
                rdf_class=str(rdf_class),
                location_uri=str(location_uri),
                location_type=parsed_type,
                is_listed=is_listed,
            )
        except pydantic.ValidationError as exc:
            raise _invalid_input(exc) from exc

        profile = await load_registry(profile, self._client, headers=headers)
        _require_index_graph(profile, request.is_listed)
        return await self.add_to_type_index(
            profile,
            request.rdf_class,
            request.location_uri,
            request.location_type,
            request.is_listed,
            headers=headers,
        )

    async def add_to_type_index(
        self,
        profile: Profile,
        rdf_class: str,
        location_uri: str,
        location_type: LocationType,
        is_listed: bool,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Profile:
        """PATCH the registration triples in, then mirror them in memory.

        No check is made for an existing registration of the same class.
        """
        state = profile.index(is_listed)
        if state.uri is None:
            raise InvalidRequestError(
                ErrorCode.INDEX_MISSING, "Cannot register type, registry URL missing"
            )

        triples = self.registration_triples(state.uri, rdf_class, location_uri, location_type)
        try:
            await self._client.patch(
                state.uri, [], [to_nt(triple) for triple in triples], headers=headers
            )
        except TypeIndexError as exc:
            raise RemoteOperationError(
                ErrorCode.INDEX_UPDATE_FAILED,
                f"Could not register {rdf_class}: {exc.message}",
                exc.recoverable,
            ) from exc

        log.info(
            "type_registered",
            rdf_class=rdf_class,
            location=str(triples[2][2]),
            location_type=location_type,
            listed=is_listed,
        )
        return profile.with_index(is_listed, state.with_graph(with_triples(state.graph, triples)))

    # ------------------------------------------------------------------
    # Unregister
    # ------------------------------------------------------------------

    async def unregister_type(
        self,
        profile: Profile | None,
        rdf_class: str,
        is_listed: bool = False,
        location_uri: str | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Profile:
        """Remove registrations of ``rdf_class``, optionally only at one location."""
        profile = _check_profile(profile)
        if not rdf_class:
            raise InvalidRequestError(
                ErrorCode.INVALID_INPUT, "Unregistering a type requires type class"
            )
        try:
            request = UnregisterTypeInput(
                rdf_class=str(rdf_class),
                is_listed=is_listed,
                location_uri=str(location_uri) if location_uri else None,
            )
        except pydantic.ValidationError as exc:
            raise _invalid_input(exc) from exc

        profile = await load_registry(profile, self._client, headers=headers)
        _require_index_graph(profile, request.is_listed)
        return await self.remove_from_type_index(
            profile,
            request.rdf_class,
            request.is_listed,
            request.location_uri,
            headers=headers,
        )

    async def remove_from_type_index(
        self,
        profile: Profile,
        rdf_class: str,
        is_listed: bool,
        location_uri: str | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Profile:
        """PATCH out every statement about the matching registrations, then reload.

        Returns ``profile`` as-is, without any request, when nothing matches.
        """
        state = profile.index(is_listed)
        if state.uri is None:
            raise InvalidRequestError(
                ErrorCode.INDEX_MISSING, "Cannot unregister type, registry URL missing"
            )

        registrations = registrations_from_graph(state.graph, rdf_class, is_listed)
        if location_uri is not None:
            registrations = [r for r in registrations if r.location_uri == location_uri]
        if not registrations or state.graph is None:
            log.debug(
                "type_unregister_noop",
                rdf_class=rdf_class,
                location=location_uri,
                listed=is_listed,
            )
            return profile

        # Whole-subject removal, so annotations beyond the three known
        # predicates go too.
        to_delete: list[str] = []
        seen: set[str] = set()
        for registration in registrations:
            if registration.registration_uri in seen:
                continue
            seen.add(registration.registration_uri)
            subject = URIRef(registration.registration_uri)
            to_delete.extend(
                to_nt(triple) for triple in state.graph.triples((subject, None, None))
            )

        try:
            await self._client.patch(state.uri, to_delete, [], headers=headers)
        except TypeIndexError as exc:
            raise RemoteOperationError(
                ErrorCode.INDEX_UPDATE_FAILED,
                f"Could not unregister {rdf_class}: {exc.message}",
                exc.recoverable,
            ) from exc

        log.info(
            "type_unregistered",
            rdf_class=rdf_class,
            registrations=len(seen),
            statements=len(to_delete),
            listed=is_listed,
        )
        return await load_registry(profile, self._client, headers=headers)
