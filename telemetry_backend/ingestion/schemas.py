"""
Request/response schemas for the telemetry record kinds.

Strict pydantic models: a field of the wrong JSON type or a missing required
field fails validation, and the transport rejects the whole request. JSON
names are camelCase (aliases); attribute names match the row model columns so
to_row() feeds the record store directly.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from telemetry_backend.database.models import RecordKind

# Column limits: BigInteger and Integer are signed 64- and 32-bit
BIGINT_MAX = 2**63 - 1
INT_MAX = 2**31 - 1


class TelemetryRecord(BaseModel):
    """Base for all record kinds: strict decoding, camelCase aliases, server-assigned id."""

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    kind: ClassVar[RecordKind]

    id: int | None = Field(None, description="Server-assigned row id; ignored on create")

    def to_row(self) -> dict[str, Any]:
        """Column values for the store: every field except id."""
        return self.model_dump(exclude={"id"})

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# -----------------------------------------------------------------------------
# Protocol stats
# -----------------------------------------------------------------------------


class Metric(BaseModel):
    """Traffic counters for one protocol."""

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    total_in: int = Field(0, alias="totalIn", ge=0)
    total_out: int = Field(0, alias="totalOut", ge=0)
    rate_in: float = Field(0.0, alias="rateIn", ge=0)
    rate_out: float = Field(0.0, alias="rateOut", ge=0)


class ProtocolStats(TelemetryRecord):
    """Per-protocol traffic report from one node. peer_id arrives raw and is stored anonymized."""

    kind: ClassVar[RecordKind] = RecordKind.PROTOCOL_STATS

    peer_id: str = Field(..., alias="hostID", min_length=1)
    relay: Metric = Field(default_factory=Metric)
    store: Metric = Field(default_factory=Metric)
    filter_push: Metric = Field(default_factory=Metric, alias="filter-push")
    light_push: Metric = Field(default_factory=Metric, alias="lightpush")
    created_at: int | None = Field(None, alias="createdAt")

    def to_row(self) -> dict[str, Any]:
        row = super().to_row()
        # JSON columns keep the camelCase counter names
        for name in ("relay", "store", "filter_push", "light_push"):
            row[name] = getattr(self, name).model_dump(by_alias=True)
        return row


# -----------------------------------------------------------------------------
# Message records
# -----------------------------------------------------------------------------


class ReceivedMessage(TelemetryRecord):
    kind: ClassVar[RecordKind] = RecordKind.RECEIVED_MESSAGE

    chat_id: str = Field(..., alias="chatId")
    message_hash: str = Field(..., alias="messageHash")
    message_id: str = Field(..., alias="messageId")
    message_type: str = Field(..., alias="messageType")
    message_size: int = Field(0, alias="messageSize", ge=0, le=INT_MAX)
    receiver_key_uid: str = Field(..., alias="receiverKeyUID")
    node_name: str = Field(..., alias="nodeName")
    sent_at: int = Field(..., alias="sentAt", ge=0, le=BIGINT_MAX)
    topic: str
    pubsub_topic: str = Field(..., alias="pubsubTopic")
    created_at: int | None = Field(None, alias="createdAt")


class WakuMessage(TelemetryRecord):
    kind: ClassVar[RecordKind] = RecordKind.WAKU_MESSAGE

    wallet_address: str = Field(..., alias="walletAddress")
    peer_id_sender: str = Field(..., alias="peerIdSender")
    peer_id_reporter: str = Field(..., alias="peerIdReporter")
    sequence_hash: str = Field(..., alias="sequenceHash")
    sequence_total: int = Field(..., alias="sequenceTotal", ge=0, le=BIGINT_MAX)
    sequence_index: int = Field(..., alias="sequenceIndex", ge=0, le=BIGINT_MAX)
    content_topic: str = Field(..., alias="contentTopic")
    pubsub_topic: str = Field(..., alias="pubsubTopic")
    timestamp: int = Field(..., ge=0, le=BIGINT_MAX)
    created_at: int | None = Field(None, alias="createdAt")


# -----------------------------------------------------------------------------
# Envelopes
# -----------------------------------------------------------------------------


class ReceivedEnvelope(TelemetryRecord):
    kind: ClassVar[RecordKind] = RecordKind.RECEIVED_ENVELOPE

    message_hash: str = Field(..., alias="messageHash")
    sent_at: int = Field(..., alias="sentAt", ge=0, le=BIGINT_MAX)
    pubsub_topic: str = Field(..., alias="pubsubTopic")
    topic: str
    receiver_key_uid: str = Field(..., alias="receiverKeyUID")
    node_name: str = Field(..., alias="nodeName")
    processing_error: str = Field("", alias="processingError")
    created_at: int | None = Field(None, alias="createdAt")


class ReceivedEnvelopeUpdate(ReceivedEnvelope):
    """Same body as creation, but the id of the row to update is required."""

    id: int = Field(..., ge=1, le=INT_MAX, description="Id returned when the envelope was created")
