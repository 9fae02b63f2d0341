# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Employee directory snapshot.
Email lookup and distinct team names, built once per session.
NO business rules here — pure indexing.
"""

import json
from typing import Any, Iterable, Optional

from oncall_finder.models.domain import Employee


def parse_ndjson(text: str) -> list[dict[str, Any]]:
    """Decode a line-delimited JSON feed, skipping blank lines."""
    return [json.loads(line) for line in text.strip().splitlines() if line.strip()]


def build_directory_index(
    employees: Iterable[Employee],
) -> tuple[dict[str, Employee], list[str]]:
    """
    Return (lower-cased email -> employee, distinct team names).
    Entries without an email are left out of the lookup, entries without a
    team name out of the team list. Duplicate emails: last one wins.
    Team names keep first-seen order.
    """
    by_email: dict[str, Employee] = {}
    teams: dict[str, None] = {}
    for employee in employees:
        if employee.email:
            by_email[employee.email.lower()] = employee
        if employee.team_name:
            teams.setdefault(employee.team_name, None)
    return by_email, list(teams)


class DirectoryRepository:
    """In-memory directory storage."""

    def __init__(self, employees: Iterable[Employee] = ()) -> None:
        self._by_email: dict[str, Employee] = {}
        self._team_names: list[str] = []
        self.load(employees)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "DirectoryRepository":
        return cls(Employee.model_validate(r) for r in records)

    # ── Read ──

    def get_by_email(self, email: Optional[str]) -> Optional[Employee]:
        if not email:
            return None
        return self._by_email.get(email.lower())

    def team_names(self) -> list[str]:
        return list(self._team_names)

    def count(self) -> int:
        return len(self._by_email)

    # ── Write ──

    def load(self, employees: Iterable[Employee]) -> None:
        self._by_email, self._team_names = build_directory_index(employees)
