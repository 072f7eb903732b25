"""Shared fixtures: a sample loaded profile, with and without index graphs."""

from __future__ import annotations

import pytest

from tests.samples import (
    PREFERENCES_DOC,
    PRIVATE_INDEX,
    PRIVATE_INDEX_TTL,
    PUBLIC_INDEX,
    PUBLIC_INDEX_TTL,
    WEB_ID,
    parse,
)
from typeindex.models.profile import Profile, TypeIndexState


@pytest.fixture()
def profile() -> Profile:
    """A loaded profile with both index URIs known but no graphs yet."""
    return Profile(
        web_id=WEB_ID,
        preferences_uri=PREFERENCES_DOC,
        is_loaded=True,
        listed=TypeIndexState(uri=PUBLIC_INDEX),
        unlisted=TypeIndexState(uri=PRIVATE_INDEX),
    )


@pytest.fixture()
def loaded_profile(profile: Profile) -> Profile:
    """``profile`` with both index graphs already parsed."""
    return profile.with_index_graph(
        PUBLIC_INDEX, parse(PUBLIC_INDEX_TTL, PUBLIC_INDEX)
    ).with_index_graph(PRIVATE_INDEX, parse(PRIVATE_INDEX_TTL, PRIVATE_INDEX))
