# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Query lifecycle.

Pure transitions over LookupView, driven by the UI layer's events
(query changed, entry selected, dismiss), plus a controller that runs the
network part of a selection. A selection is never cancelled: when two
overlap, whichever resolution finishes last writes the view. A finished
resolution closes any dropdown opened while it was in flight.
"""

from typing import Iterable, Optional

from oncall_finder.core.config import settings
from oncall_finder.core.errors import ProviderError
from oncall_finder.core.logging import get_logger
from oncall_finder.models.domain import (
    CatalogEntry,
    OncallAssignment,
    Suggestion,
)
from oncall_finder.schemas.views import LookupState, LookupView
from oncall_finder.services.fuzzy_search import FuzzyIndex
from oncall_finder.services.oncall_resolver import OncallResolver
from oncall_finder.services.suggestion_service import SuggestionService

logger = get_logger(__name__)

_DROPDOWN_STATES = (LookupState.TYPING, LookupState.SHOWING_DROPDOWN)


# ── Transitions ──

def query_changed(
    view: LookupView,
    text: str,
    index: FuzzyIndex,
    limit: Optional[int] = None,
) -> LookupView:
    """Search locally. Blank -> IDLE, hits -> SHOWING_DROPDOWN, none -> TYPING."""
    query = text.strip()
    if not query:
        return view.model_copy(
            update={"state": LookupState.IDLE, "query": "", "matches": ()}
        )
    matches = tuple(index.search(query, limit=limit or settings.DROPDOWN_LIMIT))
    state = LookupState.SHOWING_DROPDOWN if matches else LookupState.TYPING
    return view.model_copy(update={"state": state, "query": query, "matches": matches})


def dismiss(view: LookupView) -> LookupView:
    """Close the dropdown. Results on screen stay where they are."""
    state = LookupState.IDLE if view.state in _DROPDOWN_STATES else view.state
    return view.model_copy(update={"state": state, "matches": ()})


def entry_selected(view: LookupView, entry: CatalogEntry) -> LookupView:
    return view.model_copy(
        update={
            "state": LookupState.SELECTED,
            "query": entry.name,
            "matches": (),
            "selection": entry,
        }
    )


def resolution_started(view: LookupView) -> LookupView:
    return view.model_copy(
        update={
            "state": LookupState.RESOLVING,
            "assignments": (),
            "suggestions": (),
            "error": None,
        }
    )


def resolution_succeeded(
    view: LookupView,
    entry: CatalogEntry,
    assignments: Iterable[OncallAssignment],
    suggestions: Iterable[Suggestion] = (),
) -> LookupView:
    """Found people -> SHOWING_RESULTS; nobody -> SHOWING_SUGGESTIONS (possibly none)."""
    assignments = tuple(assignments)
    state = (
        LookupState.SHOWING_RESULTS if assignments else LookupState.SHOWING_SUGGESTIONS
    )
    return view.model_copy(
        update={
            "state": state,
            "selection": entry,
            "matches": (),
            "assignments": assignments,
            "suggestions": () if assignments else tuple(suggestions),
            "error": None,
        }
    )


def resolution_failed(view: LookupView, entry: CatalogEntry, message: str) -> LookupView:
    return view.model_copy(
        update={
            "state": LookupState.SHOWING_ERROR,
            "selection": entry,
            "matches": (),
            "assignments": (),
            "suggestions": (),
            "error": message,
        }
    )


# ── Controller ──

class LookupController:
    """Holds the current view for one user and applies events to it."""

    def __init__(
        self,
        index: FuzzyIndex,
        resolver: OncallResolver,
        suggestions: SuggestionService,
    ) -> None:
        self._index = index
        self._resolver = resolver
        self._suggestions = suggestions
        self.view = LookupView()

    def query_changed(self, text: str) -> LookupView:
        self.view = query_changed(self.view, text, self._index)
        return self.view

    def dismiss(self) -> LookupView:
        self.view = dismiss(self.view)
        return self.view

    async def select(self, entry: CatalogEntry) -> LookupView:
        """
        Resolve a selected entry. ProviderError becomes SHOWING_ERROR; the
        index and catalog are untouched so the next selection starts clean.
        """
        self.view = resolution_started(entry_selected(self.view, entry))
        try:
            assignments = await self._resolver.resolve(entry)
        except ProviderError as exc:
            logger.error("On-call lookup failed: name=%s, error=%s", entry.name, exc.message)
            self.view = resolution_failed(self.view, entry, exc.message)
            return self.view

        suggestions: list[Suggestion] = []
        if not assignments:
            suggestions = self._suggestions.suggest(entry.name)
        self.view = resolution_succeeded(self.view, entry, assignments, suggestions)
        return self.view

    async def select_suggestion(self, suggestion: Suggestion) -> LookupView:
        return await self.select(suggestion.as_entry())
