"""Inbound adapters - console presentation of store results."""

from record_store.adapters.inbound.console import (
    describe_error,
    describe_outcome,
    format_employee,
    print_employees,
    render_employees,
    report_outcome,
)

__all__ = [
    "describe_error",
    "describe_outcome",
    "format_employee",
    "print_employees",
    "render_employees",
    "report_outcome",
]
