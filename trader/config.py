"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Profile store (saved match sessions)
    DATABASE_URL: str = "sqlite:///./trader.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════════════════
    # Gemini (match profile generation)
    # ═══════════════════════════════════════════════════════════════

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: int = 120
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_MAX_TOKENS: int = 8192
    # Only HTTP 503 (model overloaded) is retried
    GEMINI_MAX_RETRIES: int = 3
    GEMINI_RETRY_DELAYS: list[int] = [2, 4]  # seconds, escalating

    # ═══════════════════════════════════════════════════════════════
    # Flag thresholds (tuned against one dataset, override per league)
    # ═══════════════════════════════════════════════════════════════

    FLAG_FTS_THRESHOLD: float = 55.0  # % first to score / concede
    FLAG_BIAS_THRESHOLD: float = 0.4  # PPG Bias
    FLAG_HVA_THRESHOLD: float = -0.15  # H v A index
    FLAG_LATE_GOAL_THRESHOLD: float = 5.0  # goals in 76-90
    FLAG_RESILIENCE_THRESHOLD: float = 30.0  # % comeback / dropped
    FLAG_HALF_SKEW_THRESHOLD: float = 60.0  # % of goals in 2nd half
    FLAG_INDEX_THRESHOLD: float = 13.0  # offence / defence index
    FLAG_CLEAN_SHEET_THRESHOLD: float = 40.0
    FLAG_SCORING_RATE_THRESHOLD: float = 35.0
    FLAG_FHG_THRESHOLD: float = 60.0
    FLAG_GOAL_EDGE_THRESHOLD: float = 2.5

    # Volatility
    VOLATILITY_MIN_MATCHES: int = 2
    VOLATILITY_CAP_PERCENT: float = 150.0

    # Sentry (error tracking, disabled when DSN empty)
    SENTRY_DSN: str = ""
    SENTRY_ENV: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
