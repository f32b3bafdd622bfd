"""Logging configuration helpers for :mod:`memoselect`."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import IO, Any, Literal

__all__ = ["JsonFormatter", "setup_logging"]


_HANDLER_MARKER = "_memoselect_handler"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=False)


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt: Literal["text", "json"] = "text",
    stream: IO[str] | None = None,
    logger_name: str = "memoselect",
) -> logging.Logger:
    """Attach a single stream handler to the ``memoselect`` logger.

    Calling the helper again replaces the handler it installed previously
    instead of stacking another one.
    """

    target = logging.getLogger(logger_name)
    for handler in list(target.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            target.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    setattr(handler, _HANDLER_MARKER, True)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    target.addHandler(handler)
    target.setLevel(level.upper() if isinstance(level, str) else level)
    return target
