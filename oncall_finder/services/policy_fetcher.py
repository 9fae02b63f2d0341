# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Paginated escalation-policy fetch.
Pages are requested one after another; a short page ends the walk.
"""

from oncall_finder.core.config import settings
from oncall_finder.core.logging import get_logger
from oncall_finder.models.domain import EscalationPolicy
from oncall_finder.services.pagerduty_client import PolicyProvider

logger = get_logger(__name__)


async def fetch_all_policies(
    provider: PolicyProvider,
    page_size: int | None = None,
) -> list[EscalationPolicy]:
    """
    Fetch every escalation policy ordered by name.
    A result that is an exact multiple of page_size costs one extra,
    empty, request. ProviderError propagates untouched.
    """
    limit = page_size or settings.POLICY_PAGE_SIZE
    if limit < 1:
        raise ValueError("page_size must be positive")

    policies: list[EscalationPolicy] = []
    offset = 0
    pages = 0
    while True:
        batch = await provider.list_policies(limit=limit, offset=offset)
        pages += 1
        policies.extend(batch)
        if len(batch) < limit:
            break
        offset += limit

    logger.info("Escalation policies fetched: count=%d, pages=%d", len(policies), pages)
    return policies
