"""Logging configuration helpers."""

import logging

_RECORD_ATTRIBUTES = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Append ``extra`` fields such as ``meal_id=3`` to each line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }
        if not context:
            return line
        fields = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} [{fields}]"


def configure_logging(level: str = "INFO") -> None:
    """Configure the package logger; safe to call more than once."""
    logger = logging.getLogger("nutrition_log")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
