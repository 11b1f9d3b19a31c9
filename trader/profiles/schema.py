"""
Saved match-profile record.

A tagged, versioned record with explicit optional fields. Stored payloads go
through load_saved_profile(), which rejects anything that does not validate
instead of trusting its shape.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trader.analysis import AnalysisInputs

PROFILE_KIND = "match_profile"
PROFILE_VERSION = 1


class SavedProfileError(Exception):
    """A stored profile payload failed validation."""


class ProfileNotFound(Exception):
    """No saved profile with the requested id."""

    def __init__(self, profile_id: str):
        super().__init__(f"Saved profile {profile_id!r} not found")
        self.profile_id = profile_id


class SourceLink(BaseModel):
    uri: str
    title: str


class ProfileInputs(AnalysisInputs):
    """The pasted blocks a profile was generated from."""

    model_config = ConfigDict(extra="forbid")


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedProfile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["match_profile"] = PROFILE_KIND
    version: Literal[1] = PROFILE_VERSION
    id: str = Field(default_factory=_new_id, min_length=1, max_length=36)
    team_a: str = Field(min_length=1)
    team_b: str = Field(min_length=1)
    profile_text: str = Field(min_length=1)
    sources: list[SourceLink] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    inputs: ProfileInputs = Field(default_factory=ProfileInputs)

    # Side reports, present once generated
    team_news: Optional[str] = None
    follow_up_answer: Optional[str] = None
    key_learnings: Optional[str] = None
    key_charts: Optional[str] = None
    key_visualisations: Optional[str] = None


def load_saved_profile(payload: Any) -> SavedProfile:
    """
    Validate a stored payload.

    The kind tag and version must be present and match; unknown fields are
    rejected.

    Raises:
        SavedProfileError: payload is not a valid SavedProfile.
    """
    if not isinstance(payload, dict):
        raise SavedProfileError(f"Saved profile must be an object, got {type(payload).__name__}")
    if payload.get("kind") != PROFILE_KIND:
        raise SavedProfileError(f"Unsupported saved profile kind: {payload.get('kind')!r}")
    if payload.get("version") != PROFILE_VERSION:
        raise SavedProfileError(f"Unsupported saved profile version: {payload.get('version')!r}")
    try:
        return SavedProfile.model_validate(payload)
    except ValidationError as e:
        raise SavedProfileError(f"Invalid saved profile: {e}") from e
