"""Structured JSON logging."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import sys
from typing import Any, TextIO

import orjson


# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON formatter emitting one object per record.

    ``extra=`` fields (index sizes, query text) are copied to the top level.
    Messages longer than MAX_MESSAGE_LEN are cut.
    """

    MAX_MESSAGE_LEN = 2000

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if len(message) > self.MAX_MESSAGE_LEN:
            message = message[: self.MAX_MESSAGE_LEN] + "..."

        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": message,
            "logger": record.name,
        }

        if "." in record.name:
            log_entry["component"] = record.name.split(".")[-1]

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        # Paths and other non-JSON extras fall back to str()
        return orjson.dumps(log_entry, default=str).decode("utf-8")


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    *,
    stream: TextIO | None = None,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Configure root logger with plain or structured JSON output.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Emit structured JSON logs when True
        stream: Destination stream, stderr by default so CLI output stays clean
        logger_levels: Per-logger level overrides (logger name -> level string)
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    root.addHandler(handler)

    for logger_name, logger_level in (logger_levels or {}).items():
        resolved = getattr(logging, logger_level.upper(), logging.INFO)
        logging.getLogger(logger_name).setLevel(resolved)
