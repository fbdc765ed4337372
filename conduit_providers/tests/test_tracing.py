from __future__ import annotations

import threading

import pytest

from conduit_providers.base.models import ModelConfig, Usage
from conduit_providers.base.tracing import (
    TraceRecord,
    drain_trace_sinks,
    emit_debug_trace,
    register_trace_sink,
    unregister_trace_sink,
)


def _record() -> TraceRecord:
    return TraceRecord(
        provider="swiss-ai",
        model_config=ModelConfig.new_or_fail("llama-3.3-70b-instruct"),
        request={"model": "llama-3.3-70b-instruct", "messages": []},
        response={"choices": []},
        usage=Usage(input_tokens=3, output_tokens=4, total_tokens=7),
    )


def test_sinks_receive_records_once():
    seen = []
    register_trace_sink(seen.append)
    register_trace_sink(seen.append)
    emit_debug_trace(_record())
    assert len(seen) == 1  # nosec B101
    assert seen[0].usage.total_tokens == 7  # nosec B101

    unregister_trace_sink(seen.append)
    emit_debug_trace(_record())
    assert len(seen) == 1  # nosec B101


def test_failing_sink_is_logged_and_isolated(log_capture):
    seen = []

    def broken(record):
        raise RuntimeError("sink exploded")

    register_trace_sink(broken)
    register_trace_sink(seen.append)
    emit_debug_trace(_record())

    assert len(seen) == 1  # nosec B101
    events = {e["event"]: e for e in log_capture.events()}
    assert events["provider.trace"]["tokens"]["total_tokens"] == 7  # nosec B101
    assert events["provider.trace"]["request"]["model"] == "llama-3.3-70b-instruct"  # nosec B101
    assert events["provider.trace.sink_error"]["sink"] == "broken"  # nosec B101
    assert events["provider.trace.sink_error"]["error"] == "sink exploded"  # nosec B101


@pytest.mark.asyncio
async def test_sinks_run_off_the_event_loop(log_capture):
    loop_thread = threading.get_ident()
    sink_threads = []

    def remember_thread(record):
        sink_threads.append(threading.get_ident())

    def broken(record):
        raise RuntimeError("sink exploded")

    register_trace_sink(broken)
    register_trace_sink(remember_thread)
    emit_debug_trace(_record())
    await drain_trace_sinks()

    assert len(sink_threads) == 1  # nosec B101
    assert sink_threads[0] != loop_thread  # nosec B101
    events = [e["event"] for e in log_capture.events()]
    assert "provider.trace.sink_error" in events  # nosec B101
