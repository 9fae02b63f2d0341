# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy. Empty results are never errors; only a missing credential
or an unreadable directory (both fatal at startup) and provider transport
failures are raised.
"""

from typing import Optional


class OncallFinderError(Exception):
    """Base class for every error raised by the lookup engine."""


class MissingCredentialError(OncallFinderError):
    """No provider token is configured. The session cannot start."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "PagerDuty token not configured. An admin needs to seed it."
        )


class ProviderError(OncallFinderError):
    """A request to the escalation-policy provider failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint

    @property
    def transient(self) -> bool:
        """Connection failures, rate limiting and 5xx are worth retrying."""
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class DirectoryError(OncallFinderError):
    """The employee directory feed could not be read. Startup aborts."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
