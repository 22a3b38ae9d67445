import logging

from travel_booking.core.logging import (
    LoggingConfig,
    PerformanceLogProcessor,
    SecurityLogProcessor,
    get_logger,
    request_id,
    track_performance,
)
from travel_booking.core.exceptions import ValidationError
from travel_booking.services.base import ServiceResult


def test_sensitive_keys_are_redacted():
    event = {"event": "login", "password": "hunter2", "nested": {"api_token": "abc", "safe": 1}}

    SecurityLogProcessor()(None, "info", event)

    assert event["password"] == "[REDACTED]"
    assert event["nested"]["api_token"] == "[REDACTED]"
    assert event["nested"]["safe"] == 1


def test_performance_category():
    processor = PerformanceLogProcessor()

    assert processor(None, "info", {"duration_seconds": 0.2})["performance_category"] == "fast"
    assert processor(None, "info", {"duration_seconds": 2.0})["performance_category"] == "moderate"
    assert processor(None, "info", {"duration_seconds": 9.0})["performance_category"] == "slow"


def test_adapter_injects_request_context(caplog):
    logger = get_logger("travel_booking.tests").add_context(component="tests")
    token = request_id.set("req-123")
    try:
        with caplog.at_level(logging.INFO, logger="travel_booking.tests"):
            logger.info("hello", extra={"booking_ref": "B1"})
    finally:
        request_id.reset(token)

    record = caplog.records[-1]
    assert record.request_id == "req-123"
    assert record.component == "tests"
    assert record.booking_ref == "B1"


def test_track_performance_reports_result_outcome(caplog):
    @track_performance("sample_operation", logger_name="travel_booking.tests.perf")
    def operation():
        return ServiceResult.from_app_exception(ValidationError(field_errors={"guests": ["nope"]}))

    with caplog.at_level(logging.INFO, logger="travel_booking.tests.perf"):
        result = operation()

    assert not result.is_success
    record = caplog.records[-1]
    assert record.operation == "sample_operation"
    assert record.success is False
    assert record.duration_seconds >= 0


def test_formatter_matches_settings(monkeypatch):
    from travel_booking.core import logging as logging_module

    monkeypatch.setattr(logging_module.settings, "ENABLE_STRUCTURED_LOGGING", False)
    monkeypatch.setattr(logging_module.settings, "LOG_FORMAT", "json")

    formatter = LoggingConfig.build_formatter()

    assert isinstance(formatter, logging_module.CustomJsonFormatter)
