"""The fixed demonstration sequence run by the ``record-store-demo`` command."""

from __future__ import annotations

import sys
from typing import TextIO

from record_store.adapters.inbound import describe_error, print_employees, report_outcome
from record_store.adapters.inbound.console import NO_EMPLOYEES
from record_store.domain.errors import StoreError
from record_store.domain.value_objects import EmployeeId, QueryResult
from record_store.ports.inbound import RecordStore


SAMPLE_EMPLOYEES: tuple[tuple[str, str, float], ...] = (
    ("Rinku Singh", "Software Developer", 85000.0),
    ("Sai Gill", "Project Manager", 95000.0),
    ("Shubhman Johnson", "QA Engineer", 75000.0),
    ("Alice Tiwary", "Senior Developer", 105000.0),
    ("Charlie Harper", "DevOps Engineer", 90000.0),
)

SALARY_UPDATE = (EmployeeId(2), 10000.0)
POSITION_SEARCH = "Developer"
DELETED_EMPLOYEE = EmployeeId(3)


def show_query(
    result: QueryResult,
    label: str,
    empty_message: str = NO_EMPLOYEES,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Print a query's employees, or its error if the query failed."""
    error = result.error
    if error is None:
        try:
            with result:
                print_employees(result, label, empty_message, out)
            return
        except StoreError as e:
            error = e
    for line in describe_error(result.operation, error):
        print(line, file=err or sys.stderr)


def run_demo(
    store: RecordStore,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Run the demonstration against an initialized store.

    A failing step is reported and the sequence carries on with the next one.
    """
    report_outcome(store.ensure_schema(), out, err)

    for name, position, salary in SAMPLE_EMPLOYEES:
        report_outcome(store.insert(name, position, salary), out, err)

    show_query(store.list_all(), "EMPLOYEE LIST", out=out, err=err)

    employee_id, new_salary = SALARY_UPDATE
    report_outcome(store.update_salary(employee_id, new_salary), out, err)

    show_query(
        store.find_by_position(POSITION_SEARCH),
        f"EMPLOYEES MATCHING: {POSITION_SEARCH}",
        f"No employees found with position containing '{POSITION_SEARCH}'",
        out=out,
        err=err,
    )

    report_outcome(store.delete(DELETED_EMPLOYEE), out, err)

    show_query(store.list_all(), "EMPLOYEE LIST", out=out, err=err)
