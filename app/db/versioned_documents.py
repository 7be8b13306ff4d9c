"""
Versioned singleton documents.

Each document class keeps one "current" row (the most recently updated one)
plus an append-only history table. Writes bump ``version`` by one and then
append history best-effort; a failed history insert is logged and never
fails the write.

There is no check-and-set by default: two writers that both read version N
will both report N + 1 and the last physical write stays current. Pass
``expected_version`` to ``write`` to get a ``VersionConflictError`` instead.

Usage:
    from app.db.versioned_documents import BOS_STATE, VersionedDocumentStore

    store = VersionedDocumentStore(BOS_STATE)
    current = store.read_current()
    result = store.write({"foo": 1}, author="chase-admin")
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable

from supabase import Client

from app.core.defaults import (
    default_bos_payload,
    default_pitch_deck_payload,
    default_site_payload,
)
from app.core.exceptions import PersistenceError, VersionConflictError
from app.core.logging import get_logger, log_with_context
from app.core.schemas_documents import CurrentDocument, HistoryEntry, WriteResult
from app.core.timeline import create_default_timeline, row_to_timeline, timeline_to_row
from app.db.supabase_client import get_supabase, is_missing_relation_error

logger = get_logger(__name__)


def _payload_to_row(payload: dict[str, Any]) -> dict[str, Any]:
    return {"payload": payload}


def _row_to_payload(row: dict[str, Any]) -> dict[str, Any]:
    return row.get("payload") or {}


@dataclass(frozen=True)
class DocumentClass:
    """Storage layout of one singleton document."""

    name: str
    table: str
    history_table: str
    default_payload: Callable[[], dict[str, Any]]
    encode_row: Callable[[dict[str, Any]], dict[str, Any]] = _payload_to_row
    decode_row: Callable[[dict[str, Any]], dict[str, Any]] = _row_to_payload
    # Extra equality filters selecting the current row; also written on every save
    current_filters: dict[str, Any] = field(default_factory=dict)
    history_payload_column: str = "payload"
    history_records_version: bool = False
    # Whether a missing table reads as cold start instead of an error
    tolerate_missing_table: bool = True


SITE_STATE = DocumentClass(
    name="site_state",
    table="site_state",
    history_table="update_history",
    default_payload=default_site_payload,
    tolerate_missing_table=False,
)

BOS_STATE = DocumentClass(
    name="bos_state",
    table="bos_state",
    history_table="bos_update_history",
    default_payload=default_bos_payload,
)

PITCH_DECK = DocumentClass(
    name="pitch_deck",
    table="pitch_deck_state",
    history_table="pitch_deck_update_history",
    default_payload=default_pitch_deck_payload,
)

UPDATE_SCHEDULE = DocumentClass(
    name="update_schedule",
    table="update_schedule_state",
    history_table="update_schedule_history",
    default_payload=create_default_timeline,
    encode_row=timeline_to_row,
    decode_row=row_to_timeline,
    current_filters={"is_active": True},
    history_payload_column="timeline",
    history_records_version=True,
)

DOCUMENT_CLASSES: dict[str, DocumentClass] = {
    doc.name: doc for doc in (SITE_STATE, BOS_STATE, PITCH_DECK, UPDATE_SCHEDULE)
}


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class VersionedDocumentStore:
    """Read-current / write-with-history operations for one document class."""

    def __init__(
        self,
        document: DocumentClass,
        client: Client | None = None,
        clock: Callable[[], str] = _utc_now,
    ):
        self.document = document
        self._client = client
        self._clock = clock

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def _fetch_current_row(self) -> dict[str, Any] | None:
        """
        Most recently updated row, or None if there is none.

        Raises:
            Exception: Store errors, including a missing table when the
                document class does not tolerate one
        """
        query = self.client.table(self.document.table).select("*")
        for column, value in self.document.current_filters.items():
            query = query.eq(column, value)

        try:
            response = query.order("updated_at", desc=True).limit(1).execute()
        except Exception as e:
            if self.document.tolerate_missing_table and is_missing_relation_error(e):
                log_with_context(
                    logger,
                    logging.WARNING,
                    "Document table missing, treating as cold start",
                    document=self.document.name,
                    table=self.document.table,
                )
                return None
            raise

        return response.data[0] if response.data else None

    def read_current(self) -> CurrentDocument:
        """
        Current document, or the default payload at version 0 on cold start.

        Returns:
            CurrentDocument

        Raises:
            Exception: If the store fails for a reason other than cold start
        """
        row = self._fetch_current_row()
        if row is None:
            return CurrentDocument(payload=self.document.default_payload(), version=0)

        return CurrentDocument(
            id=row.get("id"),
            payload=self.document.decode_row(row),
            version=row.get("version") or 0,
            updated_at=row.get("updated_at"),
            updated_by=row.get("updated_by"),
        )

    def write(
        self,
        payload: dict[str, Any],
        author: str,
        notes: str | None = None,
        expected_version: int | None = None,
    ) -> WriteResult:
        """
        Replace the current document and append a history record.

        The caller is responsible for authorization.

        Args:
            payload: New document payload (opaque to the store)
            author: Slug recorded as ``updated_by`` and history author
            notes: Optional history notes
            expected_version: If set, reject the write unless the current
                version equals it

        Returns:
            WriteResult with the new version

        Raises:
            VersionConflictError: If expected_version no longer matches
            PersistenceError: If reading or writing the current row fails
        """
        doc = self.document

        try:
            current = self._fetch_current_row()
        except Exception as e:
            logger.error(f"Failed to read current {doc.name} before write: {e}")
            raise PersistenceError(doc.name) from e

        current_version = (current or {}).get("version") or 0
        if expected_version is not None and expected_version != current_version:
            logger.warning(
                f"Rejected {doc.name} write from {author}: "
                f"expected version {expected_version}, found {current_version}"
            )
            raise VersionConflictError(doc.name, expected_version, current_version)

        next_version = current_version + 1
        row = {
            **doc.encode_row(payload),
            **doc.current_filters,
            "version": next_version,
            "updated_at": self._clock(),
            "updated_by": author,
        }

        try:
            if current and current.get("id") is not None:
                response = (
                    self.client.table(doc.table)
                    .update(row)
                    .eq("id", current["id"])
                    .execute()
                )
                row_id = current["id"]
            else:
                response = self.client.table(doc.table).insert(row).execute()
                row_id = response.data[0].get("id") if response.data else None
        except Exception as e:
            log_with_context(
                logger,
                logging.ERROR,
                f"Failed to write {doc.name}: {e}",
                document=doc.name,
                author=author,
                version=next_version,
            )
            raise PersistenceError(doc.name) from e

        log_with_context(
            logger,
            logging.INFO,
            f"Wrote {doc.name} version {next_version}",
            document=doc.name,
            author=author,
            version=next_version,
        )

        self._append_history(payload, author, notes, next_version)

        return WriteResult(id=row_id, version=next_version, payload=payload)

    def _append_history(
        self,
        payload: dict[str, Any],
        author: str,
        notes: str | None,
        version: int,
    ) -> None:
        doc = self.document
        record: dict[str, Any] = {
            doc.history_payload_column: payload,
            "author": author,
            "notes": notes,
            "created_at": self._clock(),
        }
        if doc.history_records_version:
            record["version"] = version

        try:
            self.client.table(doc.history_table).insert(record).execute()
        except Exception as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"Could not save {doc.name} history: {e}",
                document=doc.name,
                version=version,
            )

    def list_history(self, limit: int = 20) -> list[HistoryEntry]:
        """
        Recent history records, newest first.

        Raises:
            Exception: If database operation fails
        """
        doc = self.document
        response = (
            self.client.table(doc.history_table)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )

        return [
            HistoryEntry(
                id=entry.get("id"),
                author=entry.get("author"),
                notes=entry.get("notes"),
                created_at=entry.get("created_at"),
                version=entry.get("version"),
                payload=entry.get(doc.history_payload_column) or {},
            )
            for entry in response.data or []
        ]


def get_document_store(name: str) -> VersionedDocumentStore:
    """
    Store for a registered document class.

    Raises:
        KeyError: If the document class is unknown
    """
    return VersionedDocumentStore(DOCUMENT_CLASSES[name])
