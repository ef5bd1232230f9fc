# transaction_relay/lambda_handler.py
"""AWS Lambda entrypoint for API Gateway proxy events."""
import base64
import binascii
import logging
from typing import Any, Dict

from .bootstrap import build_relay
from .logging_config import reset_request_id, set_request_id

logger = logging.getLogger(__name__)

_relay = None


def get_relay():
    # built once per cold start, validation failure stops the instance
    global _relay
    if _relay is None:
        _relay = build_relay()
    return _relay


def _event_body(event: Dict[str, Any]) -> str:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True).decode("utf-8", errors="replace")
        except binascii.Error:
            logger.warning("invalid_base64_body")
    return body


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    request_id = (event.get("requestContext") or {}).get("requestId", "")
    token = set_request_id(request_id)
    try:
        logger.info("lambda_request")
        result = get_relay().handle(_event_body(event))
    finally:
        reset_request_id(token)
    return {
        "statusCode": result.status_code,
        "headers": {"Content-Type": "text/plain"},
        "body": result.body,
    }
