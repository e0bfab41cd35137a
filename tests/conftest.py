"""
Pytest fixtures for telemetry backend tests.

Uses a temporary SQLite DB for the SQLAlchemy store, and an in-memory
FlakyStore that can be told to fail specific inserts.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

import pytest

from telemetry_backend.core.exceptions import StoreError
from telemetry_backend.database.models import RecordKind
from telemetry_backend.database.store import RecordStore, SQLAlchemyRecordStore

PUBSUB_TOPIC = "/waku/2/default-waku/proto"
CONTENT_TOPIC = "/waku/1/0x0a1b2c3d/rfc26"


class FlakyStore(RecordStore):
    """
    In-memory store. Inserts whose 1-based call number is in fail_on_calls
    raise StoreError; fail_all makes every insert and update fail.
    """

    def __init__(self) -> None:
        self.rows: dict[RecordKind, dict[int, dict[str, Any]]] = defaultdict(dict)
        self.fail_on_calls: set[int] = set()
        self.fail_all = False
        self.insert_calls = 0
        self.update_calls = 0
        self._next_id = 0

    def ensure_schema(self) -> None:
        pass

    def insert(self, kind: RecordKind, fields: dict[str, Any]) -> int:
        self.insert_calls += 1
        if self.fail_all or self.insert_calls in self.fail_on_calls:
            raise StoreError("simulated insert failure", kind=kind.value)
        self._next_id += 1
        self.rows[kind][self._next_id] = dict(fields)
        return self._next_id

    def update_by_identifier(self, kind: RecordKind, identifier: int, fields: dict[str, Any]) -> None:
        self.update_calls += 1
        if self.fail_all or identifier not in self.rows[kind]:
            raise StoreError("no matching row", kind=kind.value, identifier=identifier)
        self.rows[kind][identifier].update(fields)

    def count(self) -> int:
        return sum(len(rows) for rows in self.rows.values())


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config at a temp SQLite file and clear cached settings/store for every test."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("TELEMETRY_DB_URL", raising=False)
    monkeypatch.setenv("TELEMETRY_DB_PATH", str(tmp_path / "env_telemetry.db"))

    from telemetry_backend.api_server.dependencies import reset_store_for_test
    from telemetry_backend.config.settings import reset_settings_for_test

    reset_settings_for_test()
    reset_store_for_test()
    yield
    reset_settings_for_test()
    reset_store_for_test()


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLAlchemyRecordStore on a fresh SQLite file with tables created."""
    store = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'telemetry.db'}")
    store.ensure_schema()
    yield store
    store.dispose()


@pytest.fixture
def flaky_store():
    return FlakyStore()


def _client_for(store: RecordStore):
    from fastapi.testclient import TestClient

    from telemetry_backend.api_server.dependencies import get_store
    from telemetry_backend.api_server.server import app

    app.dependency_overrides[get_store] = lambda: store
    return app, TestClient(app)


@pytest.fixture
def client(sqlite_store):
    """FastAPI TestClient backed by the temporary SQLite store."""
    app, test_client = _client_for(sqlite_store)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def flaky_client(flaky_store):
    """FastAPI TestClient backed by FlakyStore."""
    app, test_client = _client_for(flaky_store)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def waku_message_payload() -> Callable[..., dict[str, Any]]:
    def make(index: int = 0, total: int = 3, **overrides: Any) -> dict[str, Any]:
        payload = {
            "walletAddress": "0x5ffa3d11c4f6c7e9a4b0b12a43cbe1d1e3b7a9f1",
            "peerIdSender": "16Uiu2HAmSenderPeer",
            "peerIdReporter": "16Uiu2HAmReporterPeer",
            "sequenceHash": "a1b2c3d4",
            "sequenceTotal": total,
            "sequenceIndex": index,
            "contentTopic": CONTENT_TOPIC,
            "pubsubTopic": PUBSUB_TOPIC,
            "timestamp": 1700000000,
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def received_message_payload() -> Callable[..., dict[str, Any]]:
    def make(**overrides: Any) -> dict[str, Any]:
        payload = {
            "chatId": "0x02a1chat",
            "messageHash": "0xmessagehash",
            "messageId": "0xmessageid",
            "messageType": "ONE_TO_ONE",
            "messageSize": 512,
            "receiverKeyUID": "0xreceiverkeyuid",
            "nodeName": "Brave Blue Whale",
            "sentAt": 1700000000,
            "topic": CONTENT_TOPIC,
            "pubsubTopic": PUBSUB_TOPIC,
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def envelope_payload() -> Callable[..., dict[str, Any]]:
    def make(**overrides: Any) -> dict[str, Any]:
        payload = {
            "messageHash": "0xenvelopehash",
            "sentAt": 1700000000,
            "pubsubTopic": PUBSUB_TOPIC,
            "topic": CONTENT_TOPIC,
            "receiverKeyUID": "0xreceiverkeyuid",
            "nodeName": "Brave Blue Whale",
        }
        payload.update(overrides)
        return payload

    return make
