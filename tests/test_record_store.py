"""
Pytest tests for SQLAlchemyRecordStore (temporary SQLite DB).
"""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from telemetry_backend.core.exceptions import StoreError
from telemetry_backend.database.models import ProtocolStatsRow, RecordKind
from telemetry_backend.database.store import SQLAlchemyRecordStore

METRIC = {"totalIn": 1, "totalOut": 2, "rateIn": 0.5, "rateOut": 0.25}


def _stats_fields(peer_id: str = "f" * 64) -> dict:
    return {
        "peer_id": peer_id,
        "relay": METRIC,
        "store": METRIC,
        "filter_push": METRIC,
        "light_push": METRIC,
        "created_at": 1700000000,
    }


def test_insert_returns_increasing_ids(sqlite_store):
    first = sqlite_store.insert(RecordKind.PROTOCOL_STATS, _stats_fields())
    second = sqlite_store.insert(RecordKind.PROTOCOL_STATS, _stats_fields())
    assert first > 0
    assert second > first
    with Session(sqlite_store.engine) as session:
        row = session.get(ProtocolStatsRow, first)
        assert row.relay == METRIC


def test_insert_constraint_failure_is_store_error(sqlite_store):
    fields = _stats_fields()
    fields["peer_id"] = None
    with pytest.raises(StoreError) as exc_info:
        sqlite_store.insert(RecordKind.PROTOCOL_STATS, fields)
    assert exc_info.value.kind == "protocolStats"


def test_update_missing_row_is_store_error(sqlite_store):
    with pytest.raises(StoreError, match="no receivedEnvelopes row") as exc_info:
        sqlite_store.update_by_identifier(RecordKind.RECEIVED_ENVELOPE, 12345, {"processing_error": "x"})
    assert exc_info.value.identifier == 12345


def test_insert_before_schema_is_store_error(tmp_path):
    store = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'nested' / 'empty.db'}")
    try:
        with pytest.raises(StoreError):
            store.insert(RecordKind.PROTOCOL_STATS, _stats_fields())
    finally:
        store.dispose()


def test_ensure_schema_is_idempotent(sqlite_store):
    sqlite_store.ensure_schema()
    assert sqlite_store.insert(RecordKind.PROTOCOL_STATS, _stats_fields()) > 0


def test_init_tables_main_creates_schema(monkeypatch, tmp_path, capsys):
    """python -m telemetry_backend.database.init_tables creates tables at the configured DB."""
    db_path = tmp_path / "init.db"
    monkeypatch.setenv("TELEMETRY_DB_PATH", str(db_path))
    from telemetry_backend.database import init_tables

    assert init_tables.main() == 0
    assert "tables ready" in capsys.readouterr().out
    store = SQLAlchemyRecordStore(f"sqlite:///{db_path}")
    try:
        assert store.insert(RecordKind.PROTOCOL_STATS, _stats_fields()) > 0
    finally:
        store.dispose()


def test_out_of_range_integer_is_store_error(sqlite_store):
    """sqlite3 raises OverflowError past 64 bits; the store reports it as StoreError."""
    fields = {
        "wallet_address": "0xabc",
        "peer_id_sender": "sender",
        "peer_id_reporter": "reporter",
        "sequence_hash": "a1b2",
        "sequence_total": 1,
        "sequence_index": 0,
        "content_topic": "/waku/1/topic/rfc26",
        "pubsub_topic": "/waku/2/rs/16/32",
        "timestamp": 2**63,
        "created_at": 1700000000,
    }
    with pytest.raises(StoreError) as exc_info:
        sqlite_store.insert(RecordKind.WAKU_MESSAGE, fields)
    assert exc_info.value.kind == "wakuMessages"


def test_update_out_of_range_identifier_is_store_error(sqlite_store):
    with pytest.raises(StoreError) as exc_info:
        sqlite_store.update_by_identifier(RecordKind.RECEIVED_ENVELOPE, 2**64, {"processing_error": "x"})
    assert exc_info.value.identifier == 2**64
