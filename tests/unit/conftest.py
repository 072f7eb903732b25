"""Unit-specific fixtures (HTTP is mocked with respx)."""

from __future__ import annotations

import httpx
import pytest

from typeindex.client import DocumentClient
from typeindex.registration import RegistrationEngine


@pytest.fixture()
async def client():
    """DocumentClient over a plain httpx client; tests mock routes with respx."""
    async with httpx.AsyncClient() as http:
        yield DocumentClient(http)


@pytest.fixture()
def engine(client: DocumentClient) -> RegistrationEngine:
    return RegistrationEngine(client)
