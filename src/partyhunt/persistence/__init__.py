"""Persistence utilities for partyhunt."""

from .storage import (
    SessionNotFoundError,
    SQLiteStorage,
    StoredSession,
    StoreResult,
    get_storage,
)

__all__ = [
    "SessionNotFoundError",
    "SQLiteStorage",
    "StoredSession",
    "StoreResult",
    "get_storage",
]
