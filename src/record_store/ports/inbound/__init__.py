"""Inbound ports - API contracts offered by the record store."""

from record_store.ports.inbound.record_store import RecordStore

__all__ = ["RecordStore"]
