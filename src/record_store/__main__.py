"""Entry point: ``python -m record_store`` or ``record-store-demo``."""

from __future__ import annotations

import sys

from record_store.adapters.inbound import report_outcome
from record_store.application import run_demo
from record_store.domain.errors import DatabaseConnectionError
from record_store.infrastructure.config import Config
from record_store.infrastructure.container import Container


def main(config: Config | None = None) -> int:
    """Run the demonstration sequence.

    Returns:
        0 on completion, 1 when the database connection cannot be opened.
    """
    store = Container.create(config).store

    try:
        store.initialize()
    except DatabaseConnectionError as e:
        print(f"Database connection error: {e.message}", file=sys.stderr)
        return 1
    print("Database connection established successfully!")

    try:
        run_demo(store)
    finally:
        report_outcome(store.close())
    return 0


if __name__ == "__main__":
    sys.exit(main())
