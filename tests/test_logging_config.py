import json
import logging

import pytest

from transaction_relay.logging_config import (
    RequestIdFilter,
    configure_logging,
    create_json_formatter,
    reset_request_id,
    set_request_id,
)


def _record(msg="hello", **extra):
    record = logging.LogRecord("transaction_relay.relay", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level():
    configure_logging(level="debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    configure_logging()


def test_configure_logging_rejects_invalid_level():
    with pytest.raises(ValueError):
        configure_logging(level="LOUD")


def test_filter_injects_request_id_and_service():
    token = set_request_id("req-1")
    try:
        record = _record()
        assert RequestIdFilter("relay").filter(record)
    finally:
        reset_request_id(token)

    assert record.request_id == "req-1"
    assert record.service == "relay"


def test_filter_keeps_explicit_request_id():
    record = _record(request_id="explicit")
    RequestIdFilter("relay").filter(record)
    assert record.request_id == "explicit"


def test_json_formatter_renames_fields():
    record = _record(request_id="req-2", service="relay")
    payload = json.loads(create_json_formatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "transaction_relay.relay"
    assert payload["message"] == "hello"
    assert payload["request_id"] == "req-2"
