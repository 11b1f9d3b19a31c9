"""Saved match-profile sessions."""

from trader.profiles.schema import (
    ProfileInputs,
    ProfileNotFound,
    SavedProfile,
    SavedProfileError,
    SourceLink,
    load_saved_profile,
)
from trader.profiles.store import ProfileStore

__all__ = [
    "ProfileInputs",
    "ProfileNotFound",
    "ProfileStore",
    "SavedProfile",
    "SavedProfileError",
    "SourceLink",
    "load_saved_profile",
]
