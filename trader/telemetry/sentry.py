"""
Sentry integration for error tracking.

Security:
- API key headers are scrubbed before sending
- `key=` query parameters (Gemini URLs carry the API key there) are redacted,
  in the request and in HTTP breadcrumbs
- Request bodies are NOT captured (they hold the pasted stats and the key)
- PII is disabled
"""

import logging
import re
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from trader.config import Settings

logger = logging.getLogger(__name__)

_sentry_initialized = False

SENSITIVE_HEADERS = [
    "x-api-key",
    "x-goog-api-key",
    "x-gemini-api-key",
    "authorization",
    "cookie",
    "set-cookie",
    "x-forwarded-for",
]

SENSITIVE_QUERY_RE = re.compile(r"(?i)\b(token|api_key|key|secret|password)=([^&\s]*)")


def redact_query(text: str) -> str:
    return SENSITIVE_QUERY_RE.sub(r"\1=[REDACTED]", text)


def scrub_sensitive_data(event: dict, hint: dict) -> Optional[dict]:
    """Scrub API keys and request bodies from Sentry events before sending."""
    try:
        request = event.get("request") or {}

        headers = request.get("headers") or {}
        for name in list(headers.keys()):
            if name.lower() in SENSITIVE_HEADERS:
                headers[name] = "[REDACTED]"
        request["headers"] = headers

        query_string = request.get("query_string")
        if isinstance(query_string, str) and query_string:
            request["query_string"] = redact_query(query_string)

        url = request.get("url")
        if isinstance(url, str) and url:
            request["url"] = redact_query(url)

        if "data" in request:
            request["data"] = "[SCRUBBED]"

        event["request"] = request

        breadcrumbs = event.get("breadcrumbs") or {}
        for crumb in breadcrumbs.get("values", []):
            data = crumb.get("data") or {}
            if isinstance(data.get("url"), str):
                data["url"] = redact_query(data["url"])
            if isinstance(crumb.get("message"), str):
                crumb["message"] = redact_query(crumb["message"])

    except (AttributeError, KeyError, TypeError) as e:
        # A malformed event is still sent, unscrubbed fields untouched
        logger.warning(f"Sentry event scrub incomplete: {e}")

    return event


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry SDK if SENTRY_DSN is configured.

    Returns:
        True when the SDK is active (now or from an earlier call).
    """
    global _sentry_initialized

    if _sentry_initialized:
        logger.debug("Sentry already initialized, skipping")
        return True

    if not settings.SENTRY_DSN:
        logger.info("Sentry disabled: no SENTRY_DSN")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoggingIntegration(
                level=logging.ERROR,
                event_level=logging.ERROR,
            ),
        ],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=False,
        before_send=scrub_sensitive_data,
        ignore_errors=[KeyboardInterrupt, SystemExit],
    )

    _sentry_initialized = True
    logger.info(f"Sentry initialized: env={settings.SENTRY_ENV}")
    return True


def is_sentry_enabled() -> bool:
    """True once init_sentry() has run with a DSN."""
    return _sentry_initialized
