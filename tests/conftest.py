"""Shared fixtures for checkpwn tests."""

import pytest

from checkpwn.client import CheckpwnClient
from tests.fakes import FakeHIBP


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record rate-limit sleeps instead of sleeping."""
    calls: list[float] = []
    monkeypatch.setattr("checkpwn.client.time.sleep", calls.append)
    return calls


@pytest.fixture
def make_client():
    """Build a CheckpwnClient backed by a FakeHIBP."""
    clients = []

    def _make(server: FakeHIBP, api_key: str | None = "test-key") -> CheckpwnClient:
        client = CheckpwnClient(api_key=api_key, transport=server.transport)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Point HOME at tmp_path and drop checkpwn environment settings."""
    for name in ("CHECKPWN_API_KEY", "HIBP_API_KEY", "CHECKPWN_ACCOUNT_DELAY", "CHECKPWN_CONNECT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
