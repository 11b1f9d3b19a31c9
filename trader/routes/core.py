"""Core routes: health."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["core"])


class HealthResponse(BaseModel):
    status: str
    gemini_configured: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        gemini_configured=bool(request.app.state.settings.GEMINI_API_KEY),
    )
