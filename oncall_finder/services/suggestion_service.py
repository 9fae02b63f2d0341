# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Alternative policies for a name that resolved to nobody.
Reuses the session's fuzzy index; never touches the network.
"""

from oncall_finder.core.config import settings
from oncall_finder.core.logging import get_logger
from oncall_finder.metrics.prometheus import SUGGESTIONS_OFFERED
from oncall_finder.models.domain import EntryKind, Suggestion
from oncall_finder.services.fuzzy_search import TOKEN_SPLIT, FuzzyIndex

logger = get_logger(__name__)


def suggestion_tokens(name: str, min_length: int | None = None) -> list[str]:
    """Words of the name long enough to be worth a fuzzy search."""
    minimum = settings.SUGGESTION_MIN_TOKEN_LENGTH if min_length is None else min_length
    return [t for t in TOKEN_SPLIT.split(name) if t and len(t) >= minimum]


class SuggestionService:
    def __init__(
        self,
        index: FuzzyIndex,
        hits_per_token: int | None = None,
        limit: int | None = None,
    ) -> None:
        self._index = index
        self._hits_per_token = hits_per_token or settings.SUGGESTION_HITS_PER_TOKEN
        self._limit = limit or settings.SUGGESTION_LIMIT

    def suggest(self, unmatched_name: str) -> list[Suggestion]:
        """Up to `limit` policies, unique by id, first occurrence wins. May be empty."""
        suggestions: dict[str, Suggestion] = {}
        for token in suggestion_tokens(unmatched_name):
            hits = [
                m for m in self._index.search(token)
                if m.entry.kind is EntryKind.POLICY
            ][: self._hits_per_token]
            for hit in hits:
                suggestions.setdefault(
                    hit.entry.policy_id,
                    Suggestion(policy_id=hit.entry.policy_id, policy_name=hit.entry.name),
                )

        result = list(suggestions.values())[: self._limit]
        if result:
            SUGGESTIONS_OFFERED.inc(len(result))
        logger.info("Suggestions for name=%s: count=%d", unmatched_name, len(result))
        return result
