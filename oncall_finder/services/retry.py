# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Retrying provider wrapper.
Opt-in (RETRY_MAX_ATTEMPTS > 0); the lookup engine itself never retries.
"""

import asyncio
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from oncall_finder.core.config import settings
from oncall_finder.core.errors import ProviderError
from oncall_finder.core.logging import get_logger
from oncall_finder.models.domain import EscalationPolicy
from oncall_finder.services.pagerduty_client import PolicyProvider

logger = get_logger(__name__)

T = TypeVar("T")


class RetryingProvider:
    """Retries transient ProviderErrors with exponential backoff."""

    def __init__(
        self,
        inner: PolicyProvider,
        max_attempts: int | None = None,
        backoff_base: float | None = None,
    ) -> None:
        self._inner = inner
        self._retries = settings.RETRY_MAX_ATTEMPTS if max_attempts is None else max_attempts
        self._backoff = settings.RETRY_BACKOFF_BASE if backoff_base is None else backoff_base

    async def aclose(self) -> None:
        close = getattr(self._inner, "aclose", None)
        if close is not None:
            await close()

    async def list_policies(self, limit: int, offset: int) -> list[EscalationPolicy]:
        return await self._call(lambda: self._inner.list_policies(limit, offset))

    async def search_policies(self, query: str) -> list[EscalationPolicy]:
        return await self._call(lambda: self._inner.search_policies(query))

    async def list_oncalls(self, policy_ids: Sequence[str]) -> list[dict[str, Any]]:
        return await self._call(lambda: self._inner.list_oncalls(policy_ids))

    async def _call(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 1
        while True:
            try:
                return await operation()
            except ProviderError as exc:
                if not exc.transient or attempt > self._retries:
                    raise
                delay = self._backoff * (2 ** (attempt - 1))
                logger.warning(
                    "Retrying provider call: attempt=%d, delay=%.2fs, error=%s",
                    attempt, delay, exc.message,
                )
                await asyncio.sleep(delay)
                attempt += 1
