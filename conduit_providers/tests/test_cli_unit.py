from __future__ import annotations

import io
import json

import pytest

from conduit_providers.base.errors import ConfigurationError, ErrorCode, TransientNetworkError
from conduit_providers.base.factory import UnknownProviderError
from conduit_providers.base.http import TransportClient
from conduit_providers.base.resilience import retry as retry_mod
from conduit_providers.config import InMemoryConfigStore
from conduit_providers.service.cli import main
from conduit_providers.service.cli.cli_actions import error_payload, run_command
from conduit_providers.service.cli.cli_parser import build_parser

from conftest import TEST_API_KEY


def _run(argv, store=None):
    out, err = io.StringIO(), io.StringIO()
    code = run_command(build_parser().parse_args(argv), store=store, out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_parser_defaults():
    args = build_parser().parse_args(["chat", "--prompt", "hi"])
    assert (args.cmd, args.provider, args.model, args.system) == ("chat", "swiss-ai", None, "")  # nosec B101
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_providers_lists_metadata(capsys):
    code = main(["providers"])
    assert code == 0  # nosec B101
    data = json.loads(capsys.readouterr().out)
    assert [p["name"] for p in data] == ["swiss-ai", "xai", "mock"]  # nosec B101
    swiss = data[0]
    key = next(k for k in swiss["config_keys"] if k["name"] == "SWISS_AI_API_KEY")
    assert key["secret"] is True  # nosec B101


def test_chat_with_mock_provider():
    code, out, _ = _run(["chat", "mock", "--prompt", "ping pong"], store=InMemoryConfigStore())
    assert code == 0  # nosec B101
    data = json.loads(out)
    assert data["provider"] == "mock"  # nosec B101
    assert data["text"] == "echo: ping pong"  # nosec B101
    assert data["usage"]["total_tokens"] == 5  # nosec B101
    assert data["tool_requests"] == []  # nosec B101


def test_models_falls_back_to_known_models():
    code, out, _ = _run(["models", "mock"], store=InMemoryConfigStore())
    assert code == 0  # nosec B101
    assert json.loads(out) == {"provider": "mock", "live": False, "models": ["mock-echo"]}  # nosec B101


def test_missing_key_prints_json_error():
    code, out, err = _run(["models", "swiss-ai"], store=InMemoryConfigStore({"SWISS_AI_HOST": "https://h.test"}))
    assert code == 1  # nosec B101
    assert out == ""  # nosec B101
    data = json.loads(err)
    assert data["error"]["code"] == "configuration"  # nosec B101
    assert data["error"]["key"] == "SWISS_AI_API_KEY"  # nosec B101
    assert data["error"]["provider"] == "swiss-ai"  # nosec B101


def test_unknown_provider_prints_json_error():
    code, _, err = _run(["chat", "nope", "--prompt", "x"], store=InMemoryConfigStore())
    assert code == 1  # nosec B101
    assert json.loads(err)["error"]["code"] == "unknown_provider"  # nosec B101


async def _no_sleep(delay):
    return None


def test_backend_failure_never_echoes_secret(monkeypatch):
    async def _down(self, path):
        raise TransientNetworkError("connection refused", provider="swiss-ai")

    monkeypatch.setattr(TransportClient, "get", _down)
    monkeypatch.setattr(retry_mod.asyncio, "sleep", _no_sleep)
    store = InMemoryConfigStore({"SWISS_AI_API_KEY": TEST_API_KEY})
    code, out, err = _run(["models"], store=store)
    assert code == 1  # nosec B101
    assert TEST_API_KEY not in out + err  # nosec B101
    assert json.loads(err)["error"]["code"] == ErrorCode.TRANSIENT.value  # nosec B101


def test_error_payload_shapes():
    cfg = error_payload(ConfigurationError("missing", provider="xai", key="XAI_API_KEY"))
    assert cfg == {"error": {"code": "configuration", "message": "missing", "provider": "xai", "key": "XAI_API_KEY"}}  # nosec B101
    unknown = error_payload(UnknownProviderError("Unknown provider 'x'"))
    assert unknown["error"]["code"] == "unknown_provider"  # nosec B101
    net = error_payload(TransientNetworkError("down", provider="xai", code=ErrorCode.SERVER_ERROR, status=500))
    assert net["error"]["status"] == 500  # nosec B101


def test_main_log_level_flag(capsys):
    assert main(["--log-level", "ERROR", "providers"]) == 0  # nosec B101
    assert json.loads(capsys.readouterr().out)  # nosec B101
