"""
SQLAlchemy table models for the four telemetry record kinds.

Column names keep the camelCase names of the existing telemetry schema;
attributes are snake_case. Every table has an autoincrement integer id.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy import JSON, BigInteger, Column, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class RecordKind(str, Enum):
    """Record kinds accepted by the backend; the value is the table name."""

    PROTOCOL_STATS = "protocolStats"
    RECEIVED_MESSAGE = "receivedMessages"
    WAKU_MESSAGE = "wakuMessages"
    RECEIVED_ENVELOPE = "receivedEnvelopes"


class ProtocolStatsRow(Base):
    """One protocol stats report; peer_id is always the anonymized digest."""

    __tablename__ = RecordKind.PROTOCOL_STATS.value

    id = Column(Integer, primary_key=True, autoincrement=True)
    peer_id = Column("peerId", String(64), nullable=False, index=True)
    relay = Column(JSON, nullable=False)
    store = Column(JSON, nullable=False)
    filter_push = Column("filterPush", JSON, nullable=False)
    light_push = Column("lightPush", JSON, nullable=False)
    created_at = Column("createdAt", BigInteger, nullable=False, index=True)


class ReceivedMessageRow(Base):
    __tablename__ = RecordKind.RECEIVED_MESSAGE.value

    id = Column(Integer, primary_key=True, autoincrement=True)
    chat_id = Column("chatId", String(255), nullable=False)
    message_hash = Column("messageHash", String(255), nullable=False, index=True)
    message_id = Column("messageId", String(255), nullable=False)
    message_type = Column("messageType", String(255), nullable=False)
    message_size = Column("messageSize", Integer, nullable=False, default=0)
    receiver_key_uid = Column("receiverKeyUID", String(255), nullable=False)
    node_name = Column("nodeName", String(255), nullable=False)
    sent_at = Column("sentAt", BigInteger, nullable=False)
    topic = Column(String(255), nullable=False)
    pubsub_topic = Column("pubsubTopic", String(255), nullable=False)
    created_at = Column("createdAt", BigInteger, nullable=False, index=True)


class WakuMessageRow(Base):
    __tablename__ = RecordKind.WAKU_MESSAGE.value

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_address = Column("walletAddress", String(255), nullable=False)
    peer_id_sender = Column("peerIdSender", String(255), nullable=False)
    peer_id_reporter = Column("peerIdReporter", String(255), nullable=False)
    sequence_hash = Column("sequenceHash", String(255), nullable=False, index=True)
    sequence_total = Column("sequenceTotal", BigInteger, nullable=False)
    sequence_index = Column("sequenceIndex", BigInteger, nullable=False)
    content_topic = Column("contentTopic", String(255), nullable=False)
    pubsub_topic = Column("pubsubTopic", String(255), nullable=False)
    timestamp = Column(BigInteger, nullable=False)
    created_at = Column("createdAt", BigInteger, nullable=False, index=True)


class ReceivedEnvelopeRow(Base):
    """Envelope seen by a node. processing_error is the only column updated after insert."""

    __tablename__ = RecordKind.RECEIVED_ENVELOPE.value

    id = Column(Integer, primary_key=True, autoincrement=True)
    message_hash = Column("messageHash", String(255), nullable=False, index=True)
    sent_at = Column("sentAt", BigInteger, nullable=False)
    pubsub_topic = Column("pubsubTopic", String(255), nullable=False)
    topic = Column(String(255), nullable=False)
    receiver_key_uid = Column("receiverKeyUID", String(255), nullable=False)
    node_name = Column("nodeName", String(255), nullable=False)
    processing_error = Column("processingError", Text, nullable=False, default="")
    created_at = Column("createdAt", BigInteger, nullable=False, index=True)


ROW_MODELS: dict[RecordKind, type] = {
    RecordKind.PROTOCOL_STATS: ProtocolStatsRow,
    RecordKind.RECEIVED_MESSAGE: ReceivedMessageRow,
    RecordKind.WAKU_MESSAGE: WakuMessageRow,
    RecordKind.RECEIVED_ENVELOPE: ReceivedEnvelopeRow,
}
