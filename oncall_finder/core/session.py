# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Session wiring — builds every engine component once at startup and holds
them in one SessionContext. No module-level singletons.
"""

import asyncio
from typing import Callable, Optional, TypeVar

import httpx

from oncall_finder.core.config import settings
from oncall_finder.core.errors import MissingCredentialError
from oncall_finder.core.logging import get_logger
from oncall_finder.models.domain import CatalogEntry
from oncall_finder.repositories.credential_repository import CredentialRepository
from oncall_finder.repositories.directory_repository import DirectoryRepository
from oncall_finder.repositories.identity_repository import IdentityRepository
from oncall_finder.services.catalog import build_catalog
from oncall_finder.services.directory_client import DirectoryClient
from oncall_finder.services.fuzzy_search import FuzzyIndex
from oncall_finder.services.lookup_flow import LookupController
from oncall_finder.services.oncall_resolver import OncallResolver
from oncall_finder.services.pagerduty_client import PagerDutyClient, PolicyProvider
from oncall_finder.services.policy_fetcher import fetch_all_policies
from oncall_finder.services.retry import RetryingProvider
from oncall_finder.services.suggestion_service import SuggestionService

logger = get_logger(__name__)

T = TypeVar("T")


class SessionContext:
    """Everything a lookup needs, built once and read-only afterwards."""

    def __init__(
        self,
        credential: str,
        directory: DirectoryRepository,
        catalog: list[CatalogEntry],
        provider: PolicyProvider,
        first_name: Optional[str] = None,
    ) -> None:
        self.credential = credential
        self.directory = directory
        self.catalog = catalog
        self.provider = provider
        self.first_name = first_name
        self.index = FuzzyIndex(catalog)
        self.resolver = OncallResolver(provider)
        self.suggestions = SuggestionService(self.index)

    def controller(self) -> LookupController:
        """A fresh query lifecycle sharing this session's index and provider."""
        return LookupController(self.index, self.resolver, self.suggestions)

    async def aclose(self) -> None:
        close = getattr(self.provider, "aclose", None)
        if close is not None:
            await close()


async def start_session(
    directory_client: Optional[DirectoryClient] = None,
    identity: Optional[IdentityRepository] = None,
    credentials: Optional[CredentialRepository] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    provider: Optional[PolicyProvider] = None,
    directory_source: Optional[str] = None,
) -> SessionContext:
    """
    Load directory, identity and credential concurrently, then fetch every
    policy and build the catalog. Raises MissingCredentialError without a
    token; any DirectoryError or ProviderError aborts startup with no partial
    catalog, and a provider client created here is closed first.
    """
    directory_client = directory_client or DirectoryClient(http_client)
    identity = identity or IdentityRepository()
    credentials = credentials or CredentialRepository()

    directory, first_name, token = await asyncio.gather(
        directory_client.fetch(directory_source),
        _lookup(identity.get_first_name),
        _lookup(credentials.get_token),
    )
    if not token:
        logger.error("Startup aborted: provider credential missing")
        raise MissingCredentialError()

    owns_provider = provider is None
    if provider is None:
        provider = PagerDutyClient(token, http_client=http_client)
        if settings.RETRY_MAX_ATTEMPTS > 0:
            provider = RetryingProvider(provider)

    try:
        policies = await fetch_all_policies(provider)
        catalog = build_catalog(policies, directory.team_names())
    except BaseException:
        if owns_provider:
            await provider.aclose()
        raise
    logger.info("Session ready: catalog_entries=%d", len(catalog))
    return SessionContext(
        credential=token,
        directory=directory,
        catalog=catalog,
        provider=provider,
        first_name=first_name,
    )


async def _lookup(read: Callable[[], T]) -> T:
    # Local collaborators answer synchronously on the event loop thread.
    return read()
