"""Structured logging for the provider layer.

Every adapter logs through a child of the shared ``conduit`` logger, which
owns one console handler (JSON by default) on stderr. Only the standard
``logging`` module is used.

``normalized_log_event`` injects the canonical keys ``structured``, ``phase``,
``attempt``, ``error_code``, ``emitted`` and ``tokens`` so events from different
backends can be aggregated without per-provider parsing. Field names that look
like credentials are masked before serialization.

The level comes from ``CONDUIT_LOG_LEVEL`` when set and is re-read on every
``get_logger`` call.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from typing import Any, Dict, Mapping

from .log_support import JsonFormatter, LogContext


BASE_LOGGER_NAME = "conduit"
LOG_LEVEL_ENV = "CONDUIT_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_conduit_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_conduit_console_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LEVEL_NAMES: Dict[str, int] = {
    name: getattr(logging, name) for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}
_LEVEL_NAMES["WARN"] = logging.WARNING

# Field names never written verbatim to logs.
_SECRET_FIELDS = frozenset({"api_key", "authorization", "secret", "password", "token", "credential"})
REDACTED = "***"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Level name to ``logging`` constant, case-insensitive; ``default`` otherwise."""
    key = (value or "").strip().upper()
    return _LEVEL_NAMES.get(key, default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    if json_mode:
        return JsonFormatter()
    return logging.Formatter(_PLAIN_FORMAT)


def _console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _is_console(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _CONSOLE_HANDLER_ATTR, False))


def _refresh_console_handlers(logger: logging.Logger, json_mode: bool, level: int) -> None:
    for handler in list(logger.handlers):
        if not _is_console(handler):
            continue
        stream = getattr(handler, "stream", None)
        if stream is not None and not getattr(stream, "closed", False):
            handler.setLevel(level)
            continue
        # pytest capture swaps and closes stderr between tests
        logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()
        logger.addHandler(_console_handler(json_mode, level))


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    root = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if not getattr(root, _BASE_LOGGER_ATTR, False):
        root.handlers[:] = [_console_handler(json_mode, wanted)]
        root.propagate = False
        setattr(root, _BASE_LOGGER_ATTR, True)
    else:
        _refresh_console_handlers(root, json_mode, wanted)
    root.setLevel(wanted)
    return root


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``conduit`` or a ``conduit.<name>`` child that propagates to it."""
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    prefix = BASE_LOGGER_NAME + "."
    child = logging.getLogger(name if name.startswith(prefix) else prefix + name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(*, level: int | str | None = None, json_mode: bool = True) -> logging.Logger:
    """Set the shared logger's level and console format at runtime.

    ``level`` may be a number or a name such as ``"debug"``; ``None`` keeps
    the current level. The CLI calls this for ``--log-level``.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)
    if isinstance(level, str):
        logger.setLevel(_parse_level(level, default=logger.level))
    elif level is not None:
        logger.setLevel(level)
    for handler in filter(_is_console, logger.handlers):
        handler.setLevel(logger.level)
        handler.setFormatter(_make_formatter(json_mode))
    return logger


def redact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``fields`` with credential-like keys masked."""
    return {
        key: REDACTED if key.lower() in _SECRET_FIELDS and value is not None else value
        for key, value in fields.items()
    }


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Write ``event`` as one JSON object.

    Context fields come first, then ``fields`` after redaction. ``None``
    values are dropped unless ``keep_none`` is set. Nothing is serialized
    when ``level`` is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    record: Dict[str, Any] = {"event": event}
    if ctx:
        record.update(ctx.to_dict())
    kept = fields if keep_none else {k: v for k, v in fields.items() if v is not None}
    record.update(redact(kept))
    logger.log(level, json.dumps(record, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "error_code", "emitted", "tokens")


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, Mapping):
        return None if tokens is None else dict(tokens)
    to_dict = getattr(tokens, "to_dict", None)
    return to_dict() if callable(to_dict) else {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` with the canonical keys always present.

    ``error_code`` is left out when ``None``. Extra fields never replace a
    canonical key that already has a value, and ``None`` extras are dropped.
    """
    fields: Dict[str, Any] = dict(
        structured=structured,
        phase=phase,
        attempt=attempt,
        emitted=emitted,
        tokens=_coerce_tokens(tokens),
    )
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "redact",
    "REQUIRED_NORMALIZED_KEYS",
]
