# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: On-call resolution for a selected catalog entry.
Policies resolve directly by id; directory teams go through the provider's
own policy search first. Both paths share one dedup step.
"""

from typing import Any, Iterable, Sequence

from oncall_finder.core.errors import ProviderError
from oncall_finder.core.logging import get_logger
from oncall_finder.metrics.prometheus import RESOLUTIONS_TOTAL
from oncall_finder.models.domain import CatalogEntry, EntryKind, OncallAssignment
from oncall_finder.services.pagerduty_client import PolicyProvider

logger = get_logger(__name__)


def dedupe_oncalls(assignments: Iterable[OncallAssignment]) -> list[OncallAssignment]:
    """
    Keep one assignment per (person, policy): the lowest escalation level,
    first seen on ties. Sorted by level then person id.
    """
    kept: dict[tuple[str, str], OncallAssignment] = {}
    for assignment in assignments:
        key = (assignment.person_id, assignment.policy_id)
        current = kept.get(key)
        if current is None or assignment.escalation_level < current.escalation_level:
            kept[key] = assignment
    return sorted(kept.values(), key=lambda a: (a.escalation_level, a.person_id))


def parse_oncalls(raw_oncalls: Iterable[dict[str, Any]]) -> list[OncallAssignment]:
    """Convert provider records, dropping the ones without user or policy ids."""
    assignments: list[OncallAssignment] = []
    for raw in raw_oncalls:
        try:
            assignments.append(OncallAssignment.from_provider(raw))
        except ValueError as exc:
            logger.warning("Skipping malformed on-call entry: %s", exc)
    return assignments


class OncallResolver:
    """Business logic for turning a selection into current on-call people."""

    def __init__(self, provider: PolicyProvider) -> None:
        self._provider = provider

    async def resolve(self, entry: CatalogEntry) -> list[OncallAssignment]:
        if entry.kind is EntryKind.POLICY and entry.policy_id:
            return await self.resolve_by_policy_id(entry.policy_id)
        return await self.resolve_by_name(entry.name)

    async def resolve_by_policy_id(self, policy_id: str) -> list[OncallAssignment]:
        """One on-call request scoped to a single policy."""
        return await self._lookup("policy_id", [policy_id])

    async def resolve_by_name(self, name: str) -> list[OncallAssignment]:
        """
        Provider-side policy search, then one batched on-call request.
        No policy found means no second request and an empty result.
        """
        try:
            policies = await self._provider.search_policies(name)
        except ProviderError:
            RESOLUTIONS_TOTAL.labels(path="name", outcome="error").inc()
            raise
        if not policies:
            RESOLUTIONS_TOTAL.labels(path="name", outcome="empty").inc()
            logger.info("No provider policy matches name=%s", name)
            return []
        return await self._lookup("name", [p.id for p in policies])

    async def _lookup(self, path: str, policy_ids: Sequence[str]) -> list[OncallAssignment]:
        try:
            raw = await self._provider.list_oncalls(policy_ids)
        except ProviderError:
            RESOLUTIONS_TOTAL.labels(path=path, outcome="error").inc()
            raise
        assignments = dedupe_oncalls(parse_oncalls(raw))
        outcome = "found" if assignments else "empty"
        RESOLUTIONS_TOTAL.labels(path=path, outcome=outcome).inc()
        logger.info(
            "On-call resolved: path=%s, policies=%d, raw=%d, assignments=%d",
            path, len(policy_ids), len(raw), len(assignments),
        )
        return assignments
