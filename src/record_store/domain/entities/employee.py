"""Employee entity - the single record type held by the store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from record_store.domain.value_objects import EmployeeId


@dataclass(frozen=True, slots=True)
class Employee:
    """A row of the employees table.

    Attributes:
        id: Backend-assigned primary key
        name: Employee name (NOT NULL at the backend)
        position: Job title (NOT NULL at the backend)
        salary: Salary, nullable at the backend

    Example:
        >>> Employee.from_row((1, "Rinku Singh", "Software Developer", 85000.0))
        Employee(id=1, name='Rinku Singh', position='Software Developer', salary=85000.0)
    """

    id: EmployeeId
    name: str
    position: str
    salary: float | None

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> Employee:
        """Build an employee from an ``(id, name, position, salary)`` row."""
        emp_id, name, position, salary = row
        return cls(
            id=EmployeeId(int(emp_id)),
            name=name,
            position=position,
            salary=None if salary is None else float(salary),
        )
