"""Tests for observability/logger.py and observability/metrics.py"""
import io
import json
import logging
import sys

from okgroups.observability import MetricsHook, NoopMetricsHook, StructuredFormatter, get_logger


class TestStructuredFormatter:
    def _get_record(self, msg, level=logging.INFO, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        return record

    def test_basic_format(self):
        result = json.loads(StructuredFormatter().format(self._get_record("hello world")))
        assert result["message"] == "hello world"
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        record = self._get_record("msg", extra_fields={"scenario": "incorrect_sig", "groups": 0})
        result = json.loads(StructuredFormatter().format(record))
        assert result["scenario"] == "incorrect_sig"
        assert result["groups"] == 0

    def test_exception_info_included(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(self._get_record("err", exc_info=exc_info)))
        assert "ValueError" in result["exception"]


class TestGetLogger:
    def test_idempotent(self):
        first = get_logger("okgroups.test.unique1")
        second = get_logger("okgroups.test.unique1")
        assert first is second
        assert len(first.handlers) == 1
        assert first.propagate is False

    def test_writes_json_to_stream(self):
        stream = io.StringIO()
        log = get_logger("okgroups.test.unique2", level="info", stream=stream)
        log.info("probe done", extra={"extra_fields": {"passed": 9}})
        data = json.loads(stream.getvalue())
        assert data["message"] == "probe done"
        assert data["passed"] == 9

    def test_level_respected(self):
        stream = io.StringIO()
        log = get_logger("okgroups.test.unique3", level=logging.WARNING, stream=stream)
        log.info("hidden")
        assert stream.getvalue() == ""


class TestMetrics:
    def test_noop_satisfies_protocol(self):
        hook = NoopMetricsHook()
        assert isinstance(hook, MetricsHook)
        hook.increment("okgroups.requests_total", tags={"status": "200"})
        hook.timing("okgroups.request_duration_ms", 1.5)
