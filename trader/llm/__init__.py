"""Gemini-backed match profile generation."""

from trader.llm.gemini_client import GeminiClient, GeminiError, GeminiOverloadedError, GeminiResult
from trader.llm.profile_generator import ProfileGenerator, ProfileInputError, ProfileReport

__all__ = [
    "GeminiClient",
    "GeminiError",
    "GeminiOverloadedError",
    "GeminiResult",
    "ProfileGenerator",
    "ProfileInputError",
    "ProfileReport",
]
