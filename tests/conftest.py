from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest

from barista_client import AsyncBaristaClient, Record, SyncBaristaClient

BASE_URL = "https://barista.example.com/api/"
HOST = "barista.example.com"
KEY = "test-key"
SECRET = "test-secret"


def api_path(resource: str) -> str:
    """Path of a resource endpoint as the server sees it."""
    return f"/api/{resource}/"


class Account(Record):
    """Minimal record type used for list retrieval tests."""

    code: str
    name: str

    @property
    def id(self) -> str:
        return self.code


@pytest.fixture
def sync_client() -> Iterator[SyncBaristaClient]:
    """Provide a blocking client, closed after the test."""
    with SyncBaristaClient(BASE_URL, KEY, SECRET) as client:
        yield client


@pytest.fixture
async def async_client() -> AsyncIterator[AsyncBaristaClient]:
    """Provide an asyncio client, closed after the test."""
    async with AsyncBaristaClient(BASE_URL, KEY, SECRET) as client:
        yield client
