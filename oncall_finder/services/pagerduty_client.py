# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: PagerDuty client — read-only calls to the escalation-policy provider.
Every failure surfaces as a ProviderError; nothing is retried here.
"""

import time
from typing import Any, Optional, Protocol, Sequence

import httpx

from oncall_finder.core.config import settings
from oncall_finder.core.errors import ProviderError
from oncall_finder.core.logging import get_logger
from oncall_finder.metrics.prometheus import (
    PROVIDER_ERRORS,
    PROVIDER_LATENCY,
    PROVIDER_REQUESTS,
)
from oncall_finder.models.domain import EscalationPolicy

logger = get_logger(__name__)


class PolicyProvider(Protocol):
    """What the fetcher and resolver need from the provider."""

    async def list_policies(self, limit: int, offset: int) -> list[EscalationPolicy]:
        ...

    async def search_policies(self, query: str) -> list[EscalationPolicy]:
        ...

    async def list_oncalls(self, policy_ids: Sequence[str]) -> list[dict[str, Any]]:
        ...


class PagerDutyClient:
    """Async PagerDuty REST v2 client."""

    def __init__(
        self,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str | None = None,
    ) -> None:
        self._token = token
        self._base_url = (base_url or settings.PAGERDUTY_API_URL).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=settings.PROVIDER_TIMEOUT)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PagerDutyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ── Endpoints ──

    async def list_policies(self, limit: int, offset: int) -> list[EscalationPolicy]:
        data = await self._get(
            "escalation_policies",
            {"limit": limit, "offset": offset, "sort_by": "name"},
        )
        return _policies(data)

    async def search_policies(self, query: str) -> list[EscalationPolicy]:
        data = await self._get("escalation_policies", {"query": query})
        return _policies(data)

    async def list_oncalls(self, policy_ids: Sequence[str]) -> list[dict[str, Any]]:
        params: list[tuple[str, Any]] = [
            ("escalation_policy_ids[]", pid) for pid in policy_ids
        ]
        params.append(("include[]", "users"))
        params.append(("limit", settings.ONCALL_PAGE_LIMIT))
        data = await self._get("oncalls", params)
        return list(data.get("oncalls") or [])

    # ── Internal ──

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Token token={self._token}",
            "Accept": "application/vnd.pagerduty+json;version=2",
            "Content-Type": "application/json",
        }

    async def _get(self, endpoint: str, params: Any) -> dict[str, Any]:
        url = f"{self._base_url}/{endpoint}"
        start = time.monotonic()
        try:
            resp = await self._client.get(url, params=params, headers=self._headers())
        except httpx.RequestError as exc:
            PROVIDER_REQUESTS.labels(endpoint=endpoint, status="error").inc()
            PROVIDER_ERRORS.labels(endpoint=endpoint).inc()
            logger.error(
                "Provider unreachable: endpoint=%s, error=%s", endpoint, exc,
                extra={"context": {"endpoint": endpoint}},
            )
            raise ProviderError(
                f"PagerDuty request failed: {exc}", endpoint=endpoint
            ) from exc
        finally:
            PROVIDER_LATENCY.labels(endpoint=endpoint).observe(time.monotonic() - start)

        PROVIDER_REQUESTS.labels(endpoint=endpoint, status=str(resp.status_code)).inc()
        if resp.status_code >= 400:
            PROVIDER_ERRORS.labels(endpoint=endpoint).inc()
            logger.error(
                "Provider returned an error: endpoint=%s, status=%d",
                endpoint, resp.status_code,
                extra={"context": {"endpoint": endpoint, "status": resp.status_code}},
            )
            raise ProviderError(
                f"PagerDuty returned HTTP {resp.status_code} for {endpoint}",
                status_code=resp.status_code,
                endpoint=endpoint,
            )
        try:
            data = resp.json()
        except ValueError as exc:
            PROVIDER_ERRORS.labels(endpoint=endpoint).inc()
            raise ProviderError(
                f"PagerDuty sent an unreadable response for {endpoint}",
                status_code=resp.status_code,
                endpoint=endpoint,
            ) from exc
        logger.debug("Provider request ok: endpoint=%s", endpoint)
        return data if isinstance(data, dict) else {}


def _policies(data: dict[str, Any]) -> list[EscalationPolicy]:
    return [
        EscalationPolicy.model_validate(p)
        for p in data.get("escalation_policies") or []
    ]
