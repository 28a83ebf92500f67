"""Console presenter for employee listings and operation outcomes.

Listings use fixed-width columns::

    ----- EMPLOYEE LIST -----
    ID    NAME                 POSITION             SALARY
    -------------------------------------------------------
    1     Rinku Singh          Software Developer   $85000.00
    -------------------------------------------------------

Successful outcomes are written to stdout, failures to stderr.
"""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from record_store.domain.entities import Employee
from record_store.domain.errors import StoreError
from record_store.domain.value_objects import OperationResult, OperationStatus


SEPARATOR = "-" * 55
HEADER = f"{'ID':<5} {'NAME':<20} {'POSITION':<20} {'SALARY':<10}"
NO_EMPLOYEES = "No employees found in the database."

# operation -> (success message, failure prefix)
_MESSAGES: dict[str, tuple[str, str]] = {
    "ensure_schema": ("Table 'employees' created successfully!", "Error creating table"),
    "insert": ("{rows} employee(s) inserted successfully!", "Error inserting employee"),
    "update_salary": ("Employee #{id} salary updated successfully!", "Error updating employee"),
    "delete": ("Employee #{id} deleted successfully!", "Error deleting employee"),
    "list_all": ("", "Error retrieving employees"),
    "find_by_position": ("", "Error searching employees"),
    "close": ("Database connection closed successfully!", "Error closing database connection"),
}


def format_employee(employee: Employee) -> str:
    """Format one employee as a fixed-width table row."""
    salary = employee.salary if employee.salary is not None else 0.0
    return f"{employee.id:<5d} {employee.name:<20} {employee.position:<20} ${salary:<10.2f}"


def render_employees(
    employees: Iterable[Employee],
    label: str,
    empty_message: str = NO_EMPLOYEES,
) -> str:
    """Render employees as a labelled table.

    Args:
        employees: Records to list; consumed once.
        label: Title printed above the table.
        empty_message: Line printed when there are no records.

    Returns:
        The table text, ending with a newline.
    """
    lines = ["", f"----- {label} -----", HEADER, SEPARATOR]
    rows = [format_employee(employee) for employee in employees]
    lines.extend(rows or [empty_message])
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def print_employees(
    employees: Iterable[Employee],
    label: str,
    empty_message: str = NO_EMPLOYEES,
    out: TextIO | None = None,
) -> None:
    """Write a labelled employee table to ``out`` (stdout by default)."""
    (out or sys.stdout).write(render_employees(employees, label, empty_message))


def describe_error(operation: str, error: StoreError) -> list[str]:
    """Human-readable lines for a failed operation.

    A failed rollback is reported on its own line before the original error.
    """
    prefix = _MESSAGES.get(operation, ("", f"Error in {operation}"))[1]
    lines = []
    rollback_error = getattr(error, "rollback_error", None)
    if rollback_error is not None:
        lines.append(f"Rollback failed: {rollback_error.message}")
    lines.append(f"{prefix}: {error.message}")
    return lines


def describe_outcome(result: OperationResult) -> list[str]:
    """Human-readable lines for an operation result."""
    if result.status is OperationStatus.FAILED and result.error is not None:
        return describe_error(result.operation, result.error)
    if result.status is OperationStatus.NOT_FOUND:
        return [f"No employee found with ID {result.employee_id}"]
    template = _MESSAGES.get(result.operation, ("", ""))[0]
    if not template:
        return []
    return [template.format(rows=result.rows_affected, id=result.employee_id)]


def report_outcome(
    result: OperationResult,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Print an operation result; failures go to ``err`` (stderr by default)."""
    stream = (err or sys.stderr) if result.failed else (out or sys.stdout)
    for line in describe_outcome(result):
        print(line, file=stream)
