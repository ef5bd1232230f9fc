# transaction_relay/logging_config.py
"""
Structured JSON logging.

Every record carries request_id (set per request through a ContextVar) and
service. Call configure_logging() once at startup, then use
logging.getLogger(__name__) everywhere.
"""
import logging
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

LOG_FIELDS = ("asctime", "levelname", "name", "message", "request_id", "service")

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

_request_id: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str):
    return _request_id.set(request_id)


def reset_request_id(token) -> None:
    _request_id.reset(token)


def get_request_id() -> str:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        # keep an explicit request_id passed through `extra`
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id()
        record.service = self.service_name
        return True


def create_json_formatter() -> JsonFormatter:
    return JsonFormatter(" ".join(f"%({field})s" for field in LOG_FIELDS), rename_fields=FIELD_RENAME_MAP)


def configure_logging(level: str = "INFO", service_name: str = "transaction-relay") -> None:
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}")

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(RequestIdFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]
