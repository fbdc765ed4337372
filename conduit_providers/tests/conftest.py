"""Pytest configuration for the provider test suite.

Network access is replaced by ``httpx.MockTransport``: :class:`ScriptedBackend`
answers requests from a scripted list and records what it received.
Configuration comes from an :class:`InMemoryConfigStore`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

import httpx
import pytest

from conduit_providers.base.logging import get_logger
from conduit_providers.base.resilience.retry import RetryConfig
from conduit_providers.base.tracing import clear_trace_sinks
from conduit_providers.config import InMemoryConfigStore

TEST_API_KEY = "sk-test-0123456789abcdef"

Step = Union[httpx.Response, Exception]


def completion_body(
    text: str = "hello",
    *,
    model: str = "llama-3.3-70b-instruct",
    usage: Optional[Dict[str, Any]] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Return an OpenAI-style chat completion body."""
    message: Dict[str, Any] = {"role": "assistant", "content": text}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    body: Dict[str, Any] = {
        "id": "cmpl-1",
        "model": model,
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
    }
    if usage is not None:
        body["usage"] = usage
    return body


class ScriptedBackend:
    """MockTransport handler replaying scripted responses in order.

    Each step is either an ``httpx.Response`` or an exception to raise. When
    the script runs out the last step repeats.
    """

    def __init__(self, *steps: Step) -> None:
        self.steps: List[Step] = list(steps)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        idx = min(len(self.requests), len(self.steps)) - 1
        step = self.steps[idx]
        if isinstance(step, Exception):
            raise step
        return httpx.Response(step.status_code, headers=step.headers, content=step.content)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.content]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture()
def store() -> InMemoryConfigStore:
    """Config store holding a valid Swiss AI credential."""
    return InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY, "XAI_API_KEY": TEST_API_KEY})


@pytest.fixture()
def fast_retry() -> RetryConfig:
    """Retry policy with the default attempt ceiling and no sleeping."""
    return RetryConfig(initial_delay_s=0.0)


@pytest.fixture(autouse=True)
def _isolate_trace_sinks() -> Iterator[None]:
    clear_trace_sinks()
    yield
    clear_trace_sinks()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep a developer's real credentials and .env out of the tests."""
    for name in ("SWISS_AI_API_KEY", "SWISS_AI_HOST", "XAI_API_KEY", "XAI_HOST", "CONDUIT_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))


@pytest.fixture()
def scripted():
    """Return the :class:`ScriptedBackend` factory."""
    return ScriptedBackend


@pytest.fixture()
def completion():
    """Return the :func:`completion_body` builder."""
    return completion_body


class ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        out = []
        for msg in self.messages:
            try:
                out.append(json.loads(msg))
            except ValueError:
                continue
        return out


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[ListHandler]:
    """Attach a :class:`ListHandler` to the shared ``conduit`` logger at DEBUG."""
    monkeypatch.setenv("CONDUIT_LOG_LEVEL", "DEBUG")
    logger = get_logger()
    handler = ListHandler()
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
