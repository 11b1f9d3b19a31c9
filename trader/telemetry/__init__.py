"""Error tracking."""

from trader.telemetry.sentry import init_sentry, is_sentry_enabled, scrub_sensitive_data

__all__ = ["init_sentry", "is_sentry_enabled", "scrub_sensitive_data"]
