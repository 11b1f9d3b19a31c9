"""
Profile routes: Gemini-backed report generation and saved sessions.

Error mapping:
- ProfileInputError -> 400
- ProfileNotFound -> 404
- GeminiOverloadedError -> 503
- GeminiError -> 502
- SavedProfileError (stored row no longer valid) -> 500
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from trader.analysis import AnalysisInputs, VolatilityOptions
from trader.flags import FlagThresholds
from trader.llm.gemini_client import GeminiError, GeminiOverloadedError
from trader.llm.profile_generator import ProfileGenerator, ProfileInputError
from trader.profiles.schema import (
    ProfileInputs,
    ProfileNotFound,
    SavedProfile,
    SavedProfileError,
    SourceLink,
)
from trader.profiles.store import ProfileStore
from trader.routes.analysis import analysis_payload
from trader.routes.deps import (
    get_profile_store,
    get_thresholds,
    get_volatility_options,
    make_gemini_client,
    resolve_api_key,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])


# ═══════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════


class GenerateProfileRequest(BaseModel):
    inputs: AnalysisInputs
    api_key: Optional[str] = None


class FollowUpRequest(BaseModel):
    question: str
    profile_text: str
    raw_data: str = ""
    api_key: Optional[str] = None


class KeyContentRequest(BaseModel):
    kind: str = Field(description="learnings | charts | visualisations")
    profile_text: str
    raw_data: str = ""
    api_key: Optional[str] = None


class GeneratedText(BaseModel):
    text: str
    sources: list[SourceLink] = []


class SaveProfileRequest(BaseModel):
    team_a: str = Field(min_length=1)
    team_b: str = Field(min_length=1)
    profile_text: str = Field(min_length=1)
    sources: list[SourceLink] = []
    inputs: ProfileInputs = ProfileInputs()
    team_news: Optional[str] = None
    follow_up_answer: Optional[str] = None
    key_learnings: Optional[str] = None
    key_charts: Optional[str] = None
    key_visualisations: Optional[str] = None


class ProfileSummary(BaseModel):
    id: str
    team_a: str
    team_b: str
    created_at: str


def _generated(result) -> GeneratedText:
    return GeneratedText(**result.to_dict())


def _gemini_http_error(e: GeminiError) -> HTTPException:
    if isinstance(e, GeminiOverloadedError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


# ═══════════════════════════════════════════════════════════════════
# Generation
# ═══════════════════════════════════════════════════════════════════


@router.post("/generate")
async def generate_profile(
    body: GenerateProfileRequest,
    request: Request,
    thresholds: FlagThresholds = Depends(get_thresholds),
    volatility: VolatilityOptions = Depends(get_volatility_options),
):
    """Team news, then the main report grounded on the parsed stats."""
    api_key = (body.api_key or "").strip() or request.app.state.settings.GEMINI_API_KEY
    async with make_gemini_client(request, api_key) as client:
        generator = ProfileGenerator(client, thresholds, volatility)
        try:
            report = await generator.generate(body.inputs)
        except ProfileInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except GeminiError as e:
            raise _gemini_http_error(e)

    return {
        "profile": _generated(report.profile),
        "team_news": _generated(report.team_news),
        "analysis": analysis_payload(report.analysis),
        "raw_data": report.raw_data,
    }


@router.post("/follow-up", response_model=GeneratedText)
async def ask_follow_up(body: FollowUpRequest, request: Request):
    api_key = resolve_api_key(request, body.api_key)
    async with make_gemini_client(request, api_key) as client:
        try:
            result = await ProfileGenerator(client).ask_follow_up(
                body.question, body.profile_text, body.raw_data
            )
        except ProfileInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except GeminiError as e:
            raise _gemini_http_error(e)
    return _generated(result)


@router.post("/key-content", response_model=GeneratedText)
async def generate_key_content(body: KeyContentRequest, request: Request):
    api_key = resolve_api_key(request, body.api_key)
    async with make_gemini_client(request, api_key) as client:
        try:
            result = await ProfileGenerator(client).generate_key_content(
                body.kind, body.profile_text, body.raw_data
            )
        except ProfileInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except GeminiError as e:
            raise _gemini_http_error(e)
    return _generated(result)


# ═══════════════════════════════════════════════════════════════════
# Saved sessions
# ═══════════════════════════════════════════════════════════════════


@router.get("", response_model=list[ProfileSummary])
async def list_profiles(store: ProfileStore = Depends(get_profile_store)):
    """Saved profiles, newest first."""
    profiles = await store.list()
    return [
        ProfileSummary(id=p.id, team_a=p.team_a, team_b=p.team_b, created_at=p.created_at.isoformat())
        for p in profiles
    ]


@router.post("", response_model=SavedProfile, status_code=201)
async def save_profile(body: SaveProfileRequest, store: ProfileStore = Depends(get_profile_store)):
    profile = SavedProfile(**body.model_dump())
    return await store.save(profile)


@router.get("/{profile_id}", response_model=SavedProfile)
async def get_profile(profile_id: str, store: ProfileStore = Depends(get_profile_store)):
    try:
        return await store.get(profile_id)
    except ProfileNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SavedProfileError as e:
        logger.error(f"Saved profile {profile_id} failed validation: {e}")
        raise HTTPException(status_code=500, detail="Saved profile is unreadable")


@router.delete("/{profile_id}", status_code=204)
async def delete_profile(profile_id: str, store: ProfileStore = Depends(get_profile_store)):
    try:
        await store.delete(profile_id)
    except ProfileNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
