# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Stored provider credential.
Reads the read-only token from the environment or the JSON config store.
"""

import json
from pathlib import Path
from typing import Optional

from oncall_finder.core.config import settings
from oncall_finder.core.logging import get_logger

logger = get_logger(__name__)


class CredentialRepository:
    """
    Config store of `{"key": ..., "value": ...}` documents.
    The env override wins over the stored document.
    """

    def __init__(
        self,
        store_path: str | Path | None = None,
        key: str | None = None,
        env_token: str | None = None,
    ) -> None:
        self._path = Path(store_path or settings.CONFIG_STORE_PATH)
        self._key = key or settings.CREDENTIAL_KEY
        self._env_token = settings.PAGERDUTY_TOKEN if env_token is None else env_token

    def get_token(self) -> Optional[str]:
        """Return the token, or None when nothing is configured."""
        if self._env_token:
            return self._env_token
        if not self._path.exists():
            logger.warning("Config store not found: %s", self._path)
            return None
        documents = json.loads(self._path.read_text(encoding="utf-8"))
        if isinstance(documents, dict):
            documents = documents.get("config", [])
        for doc in documents:
            if doc.get("key") == self._key and doc.get("value"):
                return doc["value"]
        return None
