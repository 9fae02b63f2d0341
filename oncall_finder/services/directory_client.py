# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Directory client — loads the employee NDJSON feed once per session.
Every failure surfaces as a DirectoryError.
"""

from pathlib import Path
from typing import Optional

import httpx

from oncall_finder.core.config import settings
from oncall_finder.core.errors import DirectoryError
from oncall_finder.core.logging import get_logger
from oncall_finder.repositories.directory_repository import (
    DirectoryRepository,
    parse_ndjson,
)

logger = get_logger(__name__)


class DirectoryClient:
    """Reads the feed from an http(s) URL or a local file."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = http_client

    async def fetch(self, source: str | None = None) -> DirectoryRepository:
        source = source or settings.DIRECTORY_SOURCE
        if source.startswith(("http://", "https://")):
            text = await self._fetch_remote(source)
        else:
            text = self._read_local(source)
        try:
            directory = DirectoryRepository.from_records(parse_ndjson(text))
        except ValueError as exc:
            logger.error("Directory feed unreadable: source=%s, error=%s", source, exc)
            raise DirectoryError(
                f"Directory feed at {source} is not valid NDJSON", source=source
            ) from exc
        logger.info(
            "Directory loaded: source=%s, employees=%d, teams=%d",
            source, directory.count(), len(directory.team_names()),
        )
        return directory

    def _read_local(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Directory file unreadable: path=%s, error=%s", path, exc)
            raise DirectoryError(
                f"Could not read the directory file {path}", source=path
            ) from exc

    async def _fetch_remote(self, url: str) -> str:
        try:
            if self._client is not None:
                resp = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=settings.DIRECTORY_TIMEOUT) as client:
                    resp = await client.get(url)
        except httpx.RequestError as exc:
            logger.error("Directory unreachable: url=%s, error=%s", url, exc)
            raise DirectoryError(
                f"Directory request failed: {exc}", source=url
            ) from exc
        if resp.status_code >= 400:
            logger.error(
                "Directory returned an error: url=%s, status=%d", url, resp.status_code,
                extra={"context": {"source": url, "status": resp.status_code}},
            )
            raise DirectoryError(
                f"Directory returned HTTP {resp.status_code}", source=url
            )
        return resp.text
