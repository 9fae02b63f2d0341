# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "oncall-finder")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ── Escalation-policy provider ──
    PAGERDUTY_API_URL: str = os.getenv(
        "PAGERDUTY_API_URL", "https://api.pagerduty.com"
    ).rstrip("/")
    PAGERDUTY_TOKEN: str = os.getenv("PAGERDUTY_TOKEN", "")
    PROVIDER_TIMEOUT: float = float(os.getenv("PROVIDER_TIMEOUT", "10.0"))
    POLICY_PAGE_SIZE: int = int(os.getenv("POLICY_PAGE_SIZE", "100"))
    ONCALL_PAGE_LIMIT: int = int(os.getenv("ONCALL_PAGE_LIMIT", "100"))
    RETRY_MAX_ATTEMPTS: int = int(os.getenv("RETRY_MAX_ATTEMPTS", "0"))
    RETRY_BACKOFF_BASE: float = float(os.getenv("RETRY_BACKOFF_BASE", "0.5"))

    # ── Fuzzy search ──
    FUZZY_THRESHOLD: float = float(os.getenv("FUZZY_THRESHOLD", "0.4"))
    FUZZY_DISTANCE: int = int(os.getenv("FUZZY_DISTANCE", "100"))
    DROPDOWN_LIMIT: int = int(os.getenv("DROPDOWN_LIMIT", "10"))

    # ── Suggestions ──
    SUGGESTION_MIN_TOKEN_LENGTH: int = int(os.getenv("SUGGESTION_MIN_TOKEN_LENGTH", "3"))
    SUGGESTION_HITS_PER_TOKEN: int = int(os.getenv("SUGGESTION_HITS_PER_TOKEN", "3"))
    SUGGESTION_LIMIT: int = int(os.getenv("SUGGESTION_LIMIT", "5"))

    # ── Collaborators ──
    DIRECTORY_SOURCE: str = os.getenv("DIRECTORY_SOURCE", "users.json")
    DIRECTORY_TIMEOUT: float = float(os.getenv("DIRECTORY_TIMEOUT", "10.0"))
    CONFIG_STORE_PATH: str = os.getenv("CONFIG_STORE_PATH", "config.json")
    CREDENTIAL_KEY: str = os.getenv("CREDENTIAL_KEY", "pagerduty_token")
    USER_FIRST_NAME: str = os.getenv("USER_FIRST_NAME", "")


settings = Settings()
