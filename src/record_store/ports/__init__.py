"""Ports layer - interface definitions following Hexagonal Architecture.

- Inbound ports: the RecordStore API offered to callers
- Outbound ports: the embedded database backend the store depends on
"""

from record_store.ports.inbound import RecordStore
from record_store.ports.outbound import (
    BackendConnection,
    BackendCursor,
    BackendError,
    DatabaseBackend,
)

__all__ = [
    # Inbound ports
    "RecordStore",
    # Outbound ports
    "BackendConnection",
    "BackendCursor",
    "BackendError",
    "DatabaseBackend",
]
