"""Domain entities for the record store."""

from record_store.domain.entities.employee import Employee

__all__ = ["Employee"]
