"""
Record store: insert a row and get its id back, or update a row by id.

All access goes through the abstract RecordStore interface so ingestion code
and tests can swap the backend. SQLAlchemyRecordStore is the production
implementation: PostgreSQL via DATABASE_URL, SQLite file otherwise.
No reads, no multi-row transactions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from telemetry_backend.config.env import mask_database_url
from telemetry_backend.core.exceptions import StoreError
from telemetry_backend.database.models import ROW_MODELS, Base, RecordKind
from telemetry_backend.telemetry_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Abstract store
# -----------------------------------------------------------------------------


class RecordStore(ABC):
    """Persistence interface the ingestion core depends on."""

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create tables if they do not exist."""
        ...

    @abstractmethod
    def insert(self, kind: RecordKind, fields: dict[str, Any]) -> int:
        """Insert one row of the given kind. Returns the generated id; raises StoreError."""
        ...

    @abstractmethod
    def update_by_identifier(self, kind: RecordKind, identifier: int, fields: dict[str, Any]) -> None:
        """Update columns of the row with this id. Raises StoreError if no row matches or on failure."""
        ...

    def dispose(self) -> None:
        """Release connections held by the store. No-op by default."""


# -----------------------------------------------------------------------------
# SQLAlchemy store
# -----------------------------------------------------------------------------


class SQLAlchemyRecordStore(RecordStore):
    """SQLAlchemy implementation; one session per statement, pooled connections."""

    def __init__(self, url: str, *, engine: Engine | None = None) -> None:
        self._url = url
        self._engine = engine or self._create_engine(url)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)

    @staticmethod
    def _create_engine(url: str) -> Engine:
        connect_args: dict[str, Any] = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
            path = url.replace("sqlite:///", "").split("?")[0]
            if path and path != ":memory:":
                Path(path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        logger.info("record_store_engine", url=mask_database_url(url))
        return engine

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        """Single session. Commits on success, rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        try:
            Base.metadata.create_all(bind=self._engine)
        except SQLAlchemyError as e:
            logger.exception("record_store_schema_failed", error=str(e))
            raise StoreError(f"could not create tables: {e}") from e
        logger.info("record_store_schema_ready", url=mask_database_url(self._url))

    def insert(self, kind: RecordKind, fields: dict[str, Any]) -> int:
        model = ROW_MODELS[kind]
        try:
            with self._session_scope() as session:
                row = model(**fields)
                session.add(row)
                session.flush()
                row_id = row.id
        except (SQLAlchemyError, OverflowError) as e:
            raise StoreError(f"insert into {kind.value} failed: {e}", kind=kind.value) from e
        return row_id

    def update_by_identifier(self, kind: RecordKind, identifier: int, fields: dict[str, Any]) -> None:
        model = ROW_MODELS[kind]
        values = {getattr(model, name): value for name, value in fields.items()}
        try:
            with self._session_scope() as session:
                matched = (
                    session.query(model)
                    .filter(model.id == identifier)
                    .update(values, synchronize_session=False)
                )
        except (SQLAlchemyError, OverflowError) as e:
            raise StoreError(
                f"update of {kind.value} id={identifier} failed: {e}",
                kind=kind.value,
                identifier=identifier,
            ) from e
        if matched == 0:
            raise StoreError(
                f"no {kind.value} row with id={identifier}",
                kind=kind.value,
                identifier=identifier,
            )

    def dispose(self) -> None:
        """Close pooled connections (shutdown, tests)."""
        self._engine.dispose()
