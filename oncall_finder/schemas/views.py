# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
View schemas — what the rendering layer receives.
These models carry display-ready data only; nothing here draws anything.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from oncall_finder.models.domain import (
    CatalogEntry,
    HighlightSegment,
    OncallAssignment,
    SearchMatch,
    Suggestion,
)


class OncallCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str
    level_label: str
    name: str
    title: str = ""
    avatar_url: Optional[str] = None
    slack_handle: Optional[str] = None
    end_label: Optional[str] = None


class DropdownItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: CatalogEntry
    segments: list[HighlightSegment]
    badge: Optional[str] = None


class LookupState(str, Enum):
    IDLE = "idle"
    TYPING = "typing"
    SHOWING_DROPDOWN = "showing_dropdown"
    SELECTED = "selected"
    RESOLVING = "resolving"
    SHOWING_RESULTS = "showing_results"
    SHOWING_SUGGESTIONS = "showing_suggestions"
    SHOWING_ERROR = "showing_error"


class LookupView(BaseModel):
    """Snapshot of one user's query lifecycle. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    state: LookupState = LookupState.IDLE
    query: str = ""
    matches: tuple[SearchMatch, ...] = ()
    selection: Optional[CatalogEntry] = None
    assignments: tuple[OncallAssignment, ...] = ()
    suggestions: tuple[Suggestion, ...] = ()
    error: Optional[str] = None
