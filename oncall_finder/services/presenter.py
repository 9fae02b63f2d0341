# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Presentation helpers — pure text formatting for the rendering layer.
"""

from datetime import datetime, tzinfo
from typing import Iterable, Optional

from oncall_finder.models.domain import EntryKind, OncallAssignment, SearchMatch
from oncall_finder.repositories.directory_repository import DirectoryRepository
from oncall_finder.schemas.views import DropdownItem, OncallCard
from oncall_finder.services.fuzzy_search import highlight_match


def escalation_label(level: int) -> str:
    if level == 1:
        return "Primary"
    if level == 2:
        return "Secondary"
    return f"Level {level}"


def format_end(end: datetime, tz: Optional[tzinfo] = None) -> str:
    """e.g. 'Oct 19, 3:00 PM UTC'."""
    if tz is not None:
        end = end.astimezone(tz)
    hour = end.hour % 12 or 12
    meridiem = "AM" if end.hour < 12 else "PM"
    label = f"{end:%b} {end.day}, {hour}:{end:%M} {meridiem}"
    zone = end.tzname()
    return f"{label} {zone}" if zone else label


def build_card(
    assignment: OncallAssignment,
    directory: DirectoryRepository,
    tz: Optional[tzinfo] = None,
) -> OncallCard:
    """Directory data wins over the provider's; the provider fills the gaps."""
    employee = directory.get_by_email(assignment.person_email)
    name = (employee.name if employee else "") or assignment.person_name or "Unknown"
    heading = assignment.policy_name
    if assignment.schedule_name:
        heading = f"{heading} - {assignment.schedule_name}"
    return OncallCard(
        heading=heading,
        level_label=escalation_label(assignment.escalation_level),
        name=name,
        title=employee.title if employee else "",
        avatar_url=(employee.avatar_url or None) if employee else None,
        slack_handle=(employee.slack_handle or None) if employee else None,
        end_label=format_end(assignment.end_time, tz) if assignment.end_time else None,
    )


def build_cards(
    assignments: Iterable[OncallAssignment],
    directory: DirectoryRepository,
    tz: Optional[tzinfo] = None,
) -> list[OncallCard]:
    return [build_card(a, directory, tz) for a in assignments]


def build_dropdown(matches: Iterable[SearchMatch]) -> list[DropdownItem]:
    return [
        DropdownItem(
            entry=m.entry,
            segments=highlight_match(m),
            badge="team" if m.entry.kind is EntryKind.TEAM else None,
        )
        for m in matches
    ]


# ── Messages ──

def greeting(first_name: Optional[str]) -> Optional[str]:
    return f"Hey {first_name}, who's on call?" if first_name else None


def search_placeholder(entry_count: int) -> str:
    return f"Search {entry_count} teams & policies..."


def no_schedule_message(name: str) -> str:
    return f'No on-call schedule found for "{name}".'


def error_message(detail: str) -> str:
    return f"Error looking up on-call: {detail}"
