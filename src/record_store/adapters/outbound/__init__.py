"""Outbound adapters - implementations of outbound ports."""

from record_store.adapters.outbound.sqlite_backend import (
    SQLiteBackend,
    SQLiteConnection,
    SQLiteCursor,
)

__all__ = [
    "SQLiteBackend",
    "SQLiteConnection",
    "SQLiteCursor",
]
