"""End-to-end registry flows against the in-memory pod."""

from __future__ import annotations

import pytest
from rdflib import URIRef

from tests.integration.pod import FakePod
from tests.samples import BOOKMARK, POST, PREFERENCES_DOC, PROFILE_DOC, WEB_ID
from typeindex.client import DocumentClient
from typeindex.errors import ErrorCode, RemoteOperationError
from typeindex.models import LocationType, Profile, TypeIndexState
from typeindex.query import registrations_for_class
from typeindex.registration import RegistrationEngine
from typeindex.registry import initialize_registry, load_registry
from typeindex.vocab import SOLID

PUBLIC = "https://alice.example/profile/publicTypeIndex.ttl"
PRIVATE = "https://alice.example/profile/privateTypeIndex.ttl"


@pytest.fixture()
def new_profile() -> Profile:
    return Profile(web_id=WEB_ID, preferences_uri=PREFERENCES_DOC, is_loaded=True)


class TestRegistryLifecycle:
    async def test_initialize_register_query_unregister(
        self,
        pod: FakePod,
        client: DocumentClient,
        engine: RegistrationEngine,
        new_profile: Profile,
    ) -> None:
        profile = await initialize_registry(new_profile, client)
        assert (URIRef(WEB_ID), SOLID.publicTypeIndex, URIRef(PUBLIC)) in pod.documents[
            PROFILE_DOC
        ]
        assert (URIRef(WEB_ID), SOLID.privateTypeIndex, URIRef(PRIVATE)) in pod.documents[
            PREFERENCES_DOC
        ]

        profile = await engine.register_type(profile, BOOKMARK, "https://alice.example/bookmarks")
        profile = await engine.register_type(profile, BOOKMARK, "https://alice.example/archive/")
        profile = await engine.register_type(
            profile, POST, "https://alice.example/posts/index.ttl", LocationType.INSTANCE, True
        )

        found = registrations_for_class(profile, BOOKMARK)
        assert sorted(r.location_uri for r in found) == [
            "https://alice.example/archive/",
            "https://alice.example/bookmarks/",
        ]
        assert len({r.registration_uri for r in found}) == 2

        # A fresh reader of the same profile sees what was stored remotely
        reader = Profile(
            web_id=WEB_ID,
            is_loaded=True,
            listed=TypeIndexState(uri=PUBLIC),
            unlisted=TypeIndexState(uri=PRIVATE),
        )
        reader = await load_registry(reader, client)
        assert set(registrations_for_class(reader, BOOKMARK)) == set(found)
        [post] = registrations_for_class(reader, POST)
        assert post.is_listed is True
        assert post.location_type is LocationType.INSTANCE

        profile = await engine.unregister_type(
            profile, BOOKMARK, location_uri="https://alice.example/archive/"
        )
        remaining = registrations_for_class(profile, BOOKMARK)
        assert [r.location_uri for r in remaining] == ["https://alice.example/bookmarks/"]

        profile = await engine.unregister_type(profile, BOOKMARK)
        assert registrations_for_class(profile, BOOKMARK) == []
        assert len(registrations_for_class(profile, POST)) == 1
        assert list(pod.documents[PRIVATE].subjects(SOLID.forClass, URIRef(BOOKMARK))) == []

    async def test_unregister_unknown_class_sends_no_patch(
        self,
        pod: FakePod,
        client: DocumentClient,
        engine: RegistrationEngine,
        new_profile: Profile,
    ) -> None:
        profile = await initialize_registry(new_profile, client)
        before = len(pod.requests)

        await engine.unregister_type(profile, BOOKMARK)

        methods = [method for method, _ in pod.requests[before:]]
        assert "PATCH" not in methods
        assert methods == ["GET", "GET"]


class TestPartialFailure:
    async def test_profile_left_unlinked_when_patch_rejected(
        self,
        pod: FakePod,
        client: DocumentClient,
        new_profile: Profile,
    ) -> None:
        pod.read_only.add(PROFILE_DOC)

        with pytest.raises(RemoteOperationError) as exc_info:
            await initialize_registry(new_profile, client)

        assert exc_info.value.code == ErrorCode.PROFILE_UPDATE_FAILED
        # The listed index document exists but nothing links to it
        assert PUBLIC in pod.documents
        assert len(pod.documents[PROFILE_DOC]) == 0
        assert PRIVATE not in pod.documents

    async def test_loader_tolerates_missing_private_index(
        self,
        pod: FakePod,
        client: DocumentClient,
        engine: RegistrationEngine,
        new_profile: Profile,
    ) -> None:
        profile = await initialize_registry(new_profile, client)
        del pod.documents[PRIVATE]

        profile = await load_registry(profile, client)
        assert profile.listed.graph is not None
        assert profile.unlisted.graph is None

        # Listed registrations still work
        profile = await engine.register_type(
            profile, POST, "https://alice.example/posts", is_listed=True
        )
        assert [r.is_listed for r in registrations_for_class(profile, POST)] == [True]
