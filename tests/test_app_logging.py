"""Tests for logging configuration."""

import logging

from nutrition_log.app_logging import ContextFormatter, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("nutrition_log")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging("debug")
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_context_formatter_appends_extra_fields() -> None:
    formatter = ContextFormatter("%(levelname)s: %(message)s")
    record = logging.makeLogRecord(
        {"levelname": "INFO", "msg": "Added meal item", "meal_id": 3, "meal_item_id": 9}
    )

    assert (
        formatter.format(record)
        == "INFO: Added meal item [meal_id=3 meal_item_id=9]"
    )


def test_context_formatter_without_extra_fields() -> None:
    formatter = ContextFormatter("%(levelname)s: %(message)s")
    record = logging.makeLogRecord({"levelname": "WARNING", "msg": "plain"})

    assert formatter.format(record) == "WARNING: plain"
