"""Outbound ports - interfaces for external dependencies.

The record store depends on a single external system: the embedded
relational engine that actually stores the rows.
"""

from record_store.ports.outbound.database_backend import (
    BackendConnection,
    BackendCursor,
    BackendError,
    DatabaseBackend,
)

__all__ = [
    "BackendConnection",
    "BackendCursor",
    "BackendError",
    "DatabaseBackend",
]
