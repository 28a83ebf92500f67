"""Adapters layer - concrete implementations of port interfaces.

- Inbound adapters: console presentation of listings and outcomes
- Outbound adapters: the SQLite database backend
"""

from record_store.adapters.outbound import SQLiteBackend

__all__ = [
    "SQLiteBackend",
]
