"""Tests for logging context managers."""

import logging

import pytest

from fare_logging import ContextFilter, LogContext, log_booking_context, log_context


@pytest.mark.unit
class TestLogContext:
    @pytest.fixture
    def logger(self):
        logger = logging.getLogger("test.context")
        logger.setLevel(logging.DEBUG)
        return logger

    @pytest.fixture
    def captured_records(self, logger):
        """Capture log records after ContextFilter has run."""
        records: list[logging.LogRecord] = []

        class RecordCapture(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        handler = RecordCapture()
        handler.addFilter(ContextFilter())
        logger.addHandler(handler)
        yield records
        logger.removeHandler(handler)
        LogContext.clear()

    def test_log_context_adds_fields(self, logger, captured_records):
        with log_context(driver_id="driver-123", customer_id="cust-456"):
            logger.info("Test message")

        record = captured_records[0]
        assert record.driver_id == "driver-123"
        assert record.customer_id == "cust-456"

    def test_fields_cleared_on_exit(self, logger, captured_records):
        with log_context(booking_id="b-1"):
            pass
        logger.info("after")

        assert not hasattr(captured_records[0], "booking_id")

    def test_nested_context_restores_outer_fields(self, logger, captured_records):
        with log_context(booking_id="b-1"):
            with log_context(category="rental"):
                logger.info("inner")
            logger.info("outer")

        inner, outer = captured_records
        assert inner.booking_id == "b-1"
        assert inner.category == "rental"
        assert outer.booking_id == "b-1"
        assert not hasattr(outer, "category")

    def test_context_cleared_after_exception(self, logger, captured_records):
        with pytest.raises(RuntimeError), log_context(booking_id="b-2"):
            raise RuntimeError("boom")

        assert LogContext.get() == {}

    def test_explicit_extra_wins_over_context(self, logger, captured_records):
        with log_context(booking_id="from-context"):
            logger.info("msg", extra={"booking_id": "from-extra"})

        assert captured_records[0].booking_id == "from-extra"


@pytest.mark.unit
class TestLogBookingContext:
    def test_sets_booking_fields_and_correlation(self):
        with log_booking_context("b-9", category="airport", vehicle_class="suv"):
            context = dict(LogContext.get())

        assert context == {
            "booking_id": "b-9",
            "correlation_id": "b-9",
            "category": "airport",
            "vehicle_class": "suv",
        }
        assert LogContext.get() == {}

    def test_custom_correlation_and_none_fields_dropped(self):
        with log_booking_context("b-9", correlation_id="req-1", driver_id=None):
            context = dict(LogContext.get())

        assert context == {"booking_id": "b-9", "correlation_id": "req-1"}
