# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Session identity. Only used to greet the user.
"""

from typing import Optional

from oncall_finder.core.config import settings


class IdentityRepository:
    def __init__(self, first_name: str | None = None) -> None:
        self._first_name = settings.USER_FIRST_NAME if first_name is None else first_name

    def get_first_name(self) -> Optional[str]:
        return self._first_name or None
