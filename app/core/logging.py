"""
Key=value logging for the Investor Hub service.

Records about versioned documents carry ``document``, ``author`` and
``version`` as first-class fields so a publish can be followed from the
request log to its history row. Session tokens and PINs are never logged.
"""

import logging
import sys
from typing import Any

from pydantic import ValidationError

from app.core.config import get_settings

# Promoted ahead of free-form context, in this order
CONTEXT_FIELDS = ("document", "author", "version")


class StructuredFormatter(logging.Formatter):
    """One line per record: ``timestamp=... level=... logger=... message=...``."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                fields[name] = value

        fields.update(getattr(record, "extra_data", None) or {})

        if record.exc_info:
            # Last line only: the exception type and message
            fields["exc"] = self.formatException(record.exc_info).splitlines()[-1]

        return " ".join(f"{key}={value}" for key, value in fields.items())


def _level_for_environment() -> int:
    try:
        app_env = get_settings().APP_ENV
    except ValidationError:
        return logging.INFO
    return logging.DEBUG if app_env == "dev" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Logger writing structured lines to stdout.

    Args:
        name: Logger name (typically __name__)
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_environment())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """
    Log with document context.

    ``document``, ``author`` and ``version`` become record attributes; any
    other keyword lands in ``extra_data``.
    """
    extra: dict[str, Any] = {
        name: context.pop(name) for name in CONTEXT_FIELDS if name in context
    }
    extra["extra_data"] = context
    logger.log(level, msg, extra=extra)
