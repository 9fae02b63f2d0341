# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Catalog builder — merges provider policies and directory teams
into one list of uniquely named search entries.
"""

from typing import Iterable

from oncall_finder.core.logging import get_logger
from oncall_finder.metrics.prometheus import CATALOG_ENTRIES
from oncall_finder.models.domain import CatalogEntry, EntryKind, EscalationPolicy

logger = get_logger(__name__)


def build_catalog(
    policies: Iterable[EscalationPolicy],
    team_names: Iterable[str],
) -> list[CatalogEntry]:
    """
    Policy entries first, in provider order, then every team whose name is
    not already a policy name. Names are unique: a repeated name keeps its
    first entry.
    """
    entries: list[CatalogEntry] = []
    seen: set[str] = set()

    for policy in policies:
        if policy.name in seen:
            logger.warning(
                "Duplicate policy name skipped: name=%s, id=%s", policy.name, policy.id
            )
            continue
        seen.add(policy.name)
        entries.append(
            CatalogEntry(name=policy.name, kind=EntryKind.POLICY, policy_id=policy.id)
        )
    policy_count = len(entries)

    for team in team_names:
        if not team or team in seen:
            continue
        seen.add(team)
        entries.append(CatalogEntry(name=team, kind=EntryKind.TEAM))

    CATALOG_ENTRIES.labels(kind=EntryKind.POLICY.value).set(policy_count)
    CATALOG_ENTRIES.labels(kind=EntryKind.TEAM.value).set(len(entries) - policy_count)
    logger.info(
        "Catalog built: policies=%d, teams=%d",
        policy_count, len(entries) - policy_count,
    )
    return entries
