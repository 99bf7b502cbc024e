# tests/test_logging.py
"""
Tests for the JSON formatter and LogContext.
"""

import json
import logging

from shiftpay.core.logging_config import JSONFormatter, LogContext


class TestJSONFormatter:
    def test_context_fields_included(self):
        record = logging.makeLogRecord(
            {"name": "shiftpay.test", "levelname": "INFO", "msg": "Added shift %d", "args": (7,), "shift_id": 7}
        )

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "Added shift 7"
        assert payload["level"] == "INFO"
        assert payload["shift_id"] == 7

    def test_extra_fields_merged(self):
        record = logging.makeLogRecord({"msg": "ok", "extra_fields": {"production": False}})

        payload = json.loads(JSONFormatter().format(record))

        assert payload["production"] is False


class TestLogContext:
    def test_fields_set_inside_block_only(self, caplog):
        logger = logging.getLogger("shiftpay.test")

        with caplog.at_level(logging.INFO):
            with LogContext(period_start="2026-03-15 00:00:00"):
                logger.info("inside")
            logger.info("outside")

        inside, outside = caplog.records[-2:]
        assert inside.period_start == "2026-03-15 00:00:00"
        assert not hasattr(outside, "period_start")
