"""Request-scoped access to the objects create_app() puts on app.state."""

from typing import Optional

import httpx
from fastapi import HTTPException, Request

from trader.analysis import VolatilityOptions
from trader.flags import FlagThresholds
from trader.llm.gemini_client import GeminiClient
from trader.profiles.store import ProfileStore


def get_thresholds(request: Request) -> FlagThresholds:
    return FlagThresholds.from_settings(request.app.state.settings)


def get_volatility_options(request: Request) -> VolatilityOptions:
    return VolatilityOptions.from_settings(request.app.state.settings)


def get_profile_store(request: Request) -> ProfileStore:
    return request.app.state.profile_store


def resolve_api_key(request: Request, api_key: Optional[str]) -> str:
    """Request key first, then GEMINI_API_KEY. 400 when neither is set."""
    key = (api_key or "").strip() or request.app.state.settings.GEMINI_API_KEY.strip()
    if not key:
        raise HTTPException(status_code=400, detail="API key is required")
    return key


def make_gemini_client(request: Request, api_key: str) -> GeminiClient:
    transport: Optional[httpx.AsyncBaseTransport] = request.app.state.gemini_transport
    return GeminiClient(api_key, request.app.state.settings, transport=transport)
