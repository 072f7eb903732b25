"""Integration test fixtures.

Provides a DocumentClient built with ``build_http_client``, an engine
configured from Settings, and a FakePod answering every request to
alice.example.
"""

from __future__ import annotations

import pytest
import respx

from tests.integration.pod import FakePod
from tests.samples import PREFERENCES_DOC, PROFILE_DOC
from typeindex.client import DocumentClient, build_http_client
from typeindex.config import Settings
from typeindex.registration import RegistrationEngine


@pytest.fixture()
def pod():
    pod = FakePod()
    pod.seed(PROFILE_DOC)
    pod.seed(PREFERENCES_DOC)
    with respx.mock:
        respx.route(host="alice.example").mock(side_effect=pod.handle)
        yield pod


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
async def client(settings: Settings):
    async with build_http_client(settings.client) as http:
        yield DocumentClient(http, settings.client)


@pytest.fixture()
def engine(client: DocumentClient, settings: Settings) -> RegistrationEngine:
    return RegistrationEngine.from_settings(client, settings)
