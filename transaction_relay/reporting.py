# transaction_relay/reporting.py
"""
Error tracking.

The relay only knows about ErrorReporter.report(error, context). Sentry is used
when a DSN is configured, otherwise failures are only logged.
"""
import logging
from typing import Mapping, Optional, Protocol

import sentry_sdk

logger = logging.getLogger(__name__)

FLUSH_TIMEOUT_SECONDS = 2.0


class ErrorReporter(Protocol):
    def report(self, error: BaseException, context: Optional[Mapping[str, str]] = None) -> None: ...


class LoggingErrorReporter:
    def report(self, error, context=None):
        logger.error(
            "error_reported",
            extra={"error_type": type(error).__name__, "error": str(error), "context": dict(context or {})},
        )


class SentryErrorReporter:
    """Captures synchronously: the event is flushed before report() returns."""

    def __init__(self, dsn: str, environment: str = "production", flush_timeout: float = FLUSH_TIMEOUT_SECONDS):
        sentry_sdk.init(dsn=dsn, environment=environment)
        self.flush_timeout = flush_timeout

    def report(self, error, context=None):
        with sentry_sdk.new_scope() as scope:
            for key, value in (context or {}).items():
                scope.set_extra(key, value)
            sentry_sdk.capture_exception(error)
        sentry_sdk.flush(timeout=self.flush_timeout)
        logger.error("error_reported", extra={"error_type": type(error).__name__, "error": str(error)})


def create_reporter(settings) -> ErrorReporter:
    if settings.sentry_dsn:
        return SentryErrorReporter(settings.sentry_dsn, environment=settings.sentry_environment)
    return LoggingErrorReporter()
