"""JSON logging formatter used by the shared ``conduit`` logger.

Messages produced by :func:`conduit_providers.base.logging.log_event` are JSON
strings already; the formatter hoists their keys to the top level so one line
holds one flat object instead of a double-encoded string.
"""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    Output always carries ``ts``, ``level`` and ``logger``. Structured
    messages are merged in; plain messages land under ``msg``. Extra record
    attributes (``logger.info(..., extra={...})``) are appended unless they
    collide with an existing key.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        parsed = None
        with contextlib.suppress(ValueError):
            parsed = json.loads(msg_text)
        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["msg"] = msg_text
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS:
                continue
            base.setdefault(k, v)
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
