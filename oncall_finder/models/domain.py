# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO network or rendering dependency.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

_END_TIME = TypeAdapter(Optional[datetime])


class Employee(BaseModel):
    """A directory record. Keys follow the directory feed."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    email: Optional[str] = None
    name: str = ""
    title: str = ""
    team_name: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, alias="slack_image_url")
    slack_handle: Optional[str] = None


class EscalationPolicy(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    name: str


class EntryKind(str, Enum):
    POLICY = "policy"
    TEAM = "team"


class CatalogEntry(BaseModel):
    """A searchable name: either a provider policy or a directory team."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: EntryKind
    policy_id: Optional[str] = None

    @model_validator(mode="after")
    def _policy_id_iff_policy(self) -> "CatalogEntry":
        if self.kind is EntryKind.POLICY and not self.policy_id:
            raise ValueError("policy entries require a policy_id")
        if self.kind is EntryKind.TEAM and self.policy_id is not None:
            raise ValueError("team entries must not carry a policy_id")
        return self


class OncallAssignment(BaseModel):
    """One person answering incidents for a policy at a given tier."""

    model_config = ConfigDict(frozen=True)

    person_id: str
    person_email: str = ""
    person_name: str = ""
    policy_id: str
    policy_name: str = ""
    schedule_name: Optional[str] = None
    escalation_level: int = Field(default=1, ge=1)
    end_time: Optional[datetime] = None

    @field_validator("person_email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("end_time", mode="before")
    @classmethod
    def _lenient_end(cls, value: Any) -> Optional[datetime]:
        # A bad timestamp only costs the card its end label.
        try:
            return _END_TIME.validate_python(value)
        except ValidationError:
            return None

    @classmethod
    def from_provider(cls, raw: dict[str, Any]) -> "OncallAssignment":
        """
        Build an assignment from one entry of the provider's `oncalls` list.
        Raises ValueError when the nested user or policy reference is missing.
        """
        user = raw.get("user") or {}
        policy = raw.get("escalation_policy") or {}
        schedule = raw.get("schedule") or {}
        if not user.get("id") or not policy.get("id"):
            raise ValueError("on-call entry lacks a user or escalation policy id")
        return cls(
            person_id=user["id"],
            person_email=user.get("email") or "",
            person_name=user.get("summary") or user.get("name") or "",
            policy_id=policy["id"],
            policy_name=policy.get("summary") or policy.get("name") or "",
            schedule_name=schedule.get("summary") or None,
            escalation_level=raw.get("escalation_level") or 1,
            end_time=raw.get("end") or None,
        )


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    policy_id: str
    policy_name: str

    def as_entry(self) -> CatalogEntry:
        """A suggestion is selectable like any policy entry."""
        return CatalogEntry(
            name=self.policy_name, kind=EntryKind.POLICY, policy_id=self.policy_id
        )


class SearchMatch(BaseModel):
    """A ranked fuzzy hit. Indices are inclusive (start, end) pairs into entry.name."""

    model_config = ConfigDict(frozen=True)

    entry: CatalogEntry
    score: float
    indices: tuple[tuple[int, int], ...] = ()


class HighlightSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    matched: bool = False
