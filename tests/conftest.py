"""Shared fixtures.

Tests never talk to a real Redis: InMemoryStore implements the same
async KeyValueStore operations over plain dicts.
"""

from __future__ import annotations

from typing import Mapping

import pytest
from fastapi.testclient import TestClient

from kosync.config import clear_config_cache
from kosync.core.errors import StoreError
from kosync.web.api import create_app


class InMemoryStore:
    """In-memory KeyValueStore fake.

    Flags:
        fail: Every call raises StoreError
        reject_writes: Writes report False without applying
    """

    def __init__(self):
        self.strings: dict[str, str] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail = False
        self.reject_writes = False
        self.closed = False

    def _record(self, op: str, key: str) -> None:
        self.calls.append((op, key))
        if self.fail:
            raise StoreError(f"{op} {key} failed: connection refused")

    async def get(self, key: str) -> str | None:
        self._record("GET", key)
        return self.strings.get(key)

    async def exists(self, key: str) -> bool:
        self._record("EXISTS", key)
        return key in self.strings or key in self.hashes

    async def set_if_absent(self, key: str, value: str) -> bool:
        self._record("SETNX", key)
        if self.reject_writes or key in self.strings:
            return False
        self.strings[key] = value
        return True

    async def hgetall(self, key: str) -> dict[str, str]:
        self._record("HGETALL", key)
        return dict(self.hashes.get(key, {}))

    async def hset_mapping(self, key: str, mapping: Mapping[str, str]) -> bool:
        self._record("HSET", key)
        if self.reject_writes:
            return False
        self.hashes.setdefault(key, {}).update(mapping)
        return True

    async def ping(self) -> bool:
        return not self.fail

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def store():
    """Fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def client(store):
    """Test client wired to the in-memory store."""
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice(client):
    """Client with account alice/secret1 registered; returns auth headers."""
    response = client.post(
        "/users/create", json={"username": "alice", "password": "secret1"}
    )
    assert response.status_code == 201
    return {"x-auth-user": "alice", "x-auth-key": "secret1"}


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Run each test from an empty directory with no KOSYNC_* overrides."""
    monkeypatch.chdir(tmp_path)
    for name in ("HOST", "PORT", "REDIS_URL", "LOG_LEVEL", "JSON_LOGS"):
        monkeypatch.delenv(f"KOSYNC_{name}", raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
