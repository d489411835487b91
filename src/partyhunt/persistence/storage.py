"""SQLite-backed session history for partyhunt."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from hashlib import sha256
from pathlib import Path
from typing import List, Literal

from ..core.models import SessionRecord
from ..services.json_serializer import (
    deserialize_session,
    serialize_session,
    serialize_timestamp,
)

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".partyhunt" / "partyhunt.db"
DB_ENV_VAR = "PARTYHUNT_DB_PATH"


def _determine_db_path() -> Path:
    override = os.environ.get(DB_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return DEFAULT_DB_PATH


StoreStatus = Literal["inserted", "skipped"]


@dataclass(frozen=True)
class StoreResult:
    """Outcome produced when saving a session."""

    session_id: int
    status: StoreStatus


@dataclass(frozen=True)
class StoredSession:
    """A saved session together with its history metadata."""

    id: int
    saved_at: str
    session: SessionRecord


class SessionNotFoundError(LookupError):
    """Raised when a history id does not exist."""

    def __init__(self, session_id: int) -> None:
        super().__init__(f"No saved session with id {session_id}.")
        self.session_id = session_id


class SQLiteStorage:
    """Thin wrapper around a SQLite database used to keep session history."""

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = Path(db_path) if db_path is not None else _determine_db_path()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialized = False

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    saved_at TEXT NOT NULL,
                    content_hash TEXT NOT NULL UNIQUE,
                    start_time TEXT NOT NULL,
                    end_time TEXT NOT NULL,
                    duration TEXT NOT NULL,
                    loot_type TEXT NOT NULL,
                    player_count INTEGER NOT NULL,
                    total_balance INTEGER NOT NULL,
                    payload_json TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_sessions_start_time ON sessions(start_time);
                """
            )
        self._initialized = True

    def save_session(self, session: SessionRecord) -> StoreResult:
        """Persist ``session``; saving identical content again is a no-op."""
        self._ensure_initialized()
        payload = serialize_session(session)
        payload_json = json.dumps(payload, sort_keys=True)
        content_hash = sha256(payload_json.encode("utf-8")).hexdigest()
        saved_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        with self._connect() as conn:
            existing = conn.execute(
                "SELECT id FROM sessions WHERE content_hash = ?", (content_hash,)
            ).fetchone()
            if existing:
                logger.info("Session already saved as #%s", existing["id"])
                return StoreResult(session_id=int(existing["id"]), status="skipped")
            cur = conn.execute(
                """
                INSERT INTO sessions (
                    saved_at, content_hash, start_time, end_time, duration,
                    loot_type, player_count, total_balance, payload_json
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    saved_at,
                    content_hash,
                    session.start_time.isoformat(),
                    session.end_time.isoformat(),
                    session.duration_label,
                    session.loot_type.value,
                    session.player_count,
                    session.total_balance,
                    payload_json,
                ),
            )
            session_id = cur.lastrowid
            if session_id is None:  # pragma: no cover - sqlite should always return a value
                raise RuntimeError("Failed to record session")
        logger.debug("Saved session %s as #%s", serialize_timestamp(session.start_time), session_id)
        return StoreResult(session_id=int(session_id), status="inserted")

    def list_sessions(self) -> List[StoredSession]:
        """Return saved sessions, newest start time first."""
        self._ensure_initialized()
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, saved_at, payload_json FROM sessions ORDER BY start_time DESC, id DESC"
            ).fetchall()
        return [_row_to_stored(row) for row in rows]

    def get_session(self, session_id: int) -> StoredSession:
        self._ensure_initialized()
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, saved_at, payload_json FROM sessions WHERE id = ?", (session_id,)
            ).fetchone()
        if row is None:
            raise SessionNotFoundError(session_id)
        return _row_to_stored(row)

    def delete_session(self, session_id: int) -> None:
        self._ensure_initialized()
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            if cur.rowcount == 0:
                raise SessionNotFoundError(session_id)


def _row_to_stored(row: sqlite3.Row) -> StoredSession:
    return StoredSession(
        id=int(row["id"]),
        saved_at=row["saved_at"],
        session=deserialize_session(json.loads(row["payload_json"])),
    )


@lru_cache(maxsize=1)
def get_storage() -> SQLiteStorage:
    """Return a cached storage instance."""
    return SQLiteStorage()
