"""Application layer for the record store.

Exports:
    - TransactionalRecordStore: Per-operation transactional façade
    - run_demo: The fixed demonstration sequence
"""

from record_store.application.demo import SAMPLE_EMPLOYEES, run_demo, show_query
from record_store.application.record_store import TransactionalRecordStore

__all__ = [
    "TransactionalRecordStore",
    "SAMPLE_EMPLOYEES",
    "run_demo",
    "show_query",
]
