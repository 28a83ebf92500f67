"""Identifiers and lifecycle states for the record store."""

from __future__ import annotations

from enum import Enum, auto
from typing import NewType


EmployeeId = NewType("EmployeeId", int)
"""Backend-assigned primary key of an employee row. Never reused by AUTOINCREMENT."""


class ConnectionState(Enum):
    """Connection lifecycle of a store.

        UNINITIALIZED ──initialize()──> OPEN ──close()──> CLOSED

    The lifecycle is linear; a closed store cannot be reopened.
    """

    UNINITIALIZED = auto()
    OPEN = auto()
    CLOSED = auto()
