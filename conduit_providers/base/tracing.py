"""Debug trace emission for completed provider calls.

Every successful ``complete`` call produces one :class:`TraceRecord` holding
the model config, the exact request payload, the raw response and the
resolved usage. The record is logged as a normalized ``provider.trace`` event
at DEBUG level and then handed to each registered sink.

Sinks are plain callables. Inside an event loop they run on the default
executor, so a slow sink never delays the completion it observes. A failing
sink is logged and skipped.

Policy notes
- No required external deps.
- No side effects on import.
- Request/response payloads never contain credentials (auth is attached by
  the transport, not the codec), so they are safe to log.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Set

from .logging import LogContext, get_logger, log_event, normalized_log_event
from .models import ModelConfig, Usage

_logger = get_logger("trace")


@dataclass(frozen=True)
class TraceRecord:
    """Observability record for one completed call."""

    provider: str
    model_config: ModelConfig
    request: Dict[str, Any]
    response: Dict[str, Any]
    usage: Usage


TraceSink = Callable[[TraceRecord], None]

_SINKS: List[TraceSink] = []
_LOCK = threading.Lock()
_PENDING: Set["asyncio.Future[None]"] = set()


def register_trace_sink(sink: TraceSink) -> None:
    """Add ``sink``; registering the same callable twice is a no-op."""
    with _LOCK:
        if sink not in _SINKS:
            _SINKS.append(sink)


def unregister_trace_sink(sink: TraceSink) -> None:
    with _LOCK:
        if sink in _SINKS:
            _SINKS.remove(sink)


def clear_trace_sinks() -> None:
    with _LOCK:
        _SINKS.clear()


def _deliver(sinks: List[TraceSink], record: TraceRecord, ctx: LogContext) -> None:
    for sink in sinks:
        try:
            sink(record)
        except Exception as e:  # noqa: BLE001 - sink failures never fail the call
            log_event(
                _logger,
                "provider.trace.sink_error",
                ctx,
                level=logging.WARNING,
                sink=getattr(sink, "__name__", repr(sink)),
                error=str(e),
            )


def emit_debug_trace(record: TraceRecord) -> None:
    """Log ``record`` at DEBUG and hand it to every registered sink.

    Inside a running event loop the sinks run on the loop's default executor
    and this returns immediately; without a loop they run inline.
    """
    ctx = LogContext(provider=record.provider, model=record.model_config.model_name)
    normalized_log_event(
        _logger,
        "provider.trace",
        ctx,
        phase="trace",
        tokens=record.usage,
        level=logging.DEBUG,
        request=record.request,
        response=record.response,
    )
    with _LOCK:
        sinks = list(_SINKS)
    if not sinks:
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        _deliver(sinks, record, ctx)
        return
    future = loop.run_in_executor(None, _deliver, sinks, record, ctx)
    _PENDING.add(future)
    future.add_done_callback(_PENDING.discard)


async def drain_trace_sinks() -> None:
    """Wait until sink deliveries started on the current loop have finished."""
    loop = asyncio.get_running_loop()
    pending = [f for f in list(_PENDING) if f.get_loop() is loop]
    if pending:
        await asyncio.gather(*pending)


__all__ = [
    "TraceRecord",
    "TraceSink",
    "register_trace_sink",
    "unregister_trace_sink",
    "clear_trace_sinks",
    "emit_debug_trace",
    "drain_trace_sinks",
]
