"""CLI action handlers.

Purpose
-------
Subcommand handlers for the provider CLI, keeping the entrypoint minimal.
This module has no top-level side effects and is safe to import in tests.

Output contract
---------------
- Success: one JSON document on stdout, exit status 0.
- Failure: ``{"error": {"code": ..., "message": ..., "provider": ...}}`` on
  stderr, exit status 1. Secret configuration values never appear in either.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, Optional, TextIO

from ...base.errors import ConfigurationError, ProviderError
from ...base.factory import ProviderFactory, UnknownProviderError
from ...base.logging import get_logger, log_event
from ...base.models import Message
from ...config import ConfigStore, default_config_store

_logger = get_logger("cli")


def _emit(payload: Any, stream: Optional[TextIO]) -> None:
    stream = stream or sys.stdout
    stream.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")


def error_payload(exc: BaseException) -> Dict[str, Any]:
    """Return the JSON error object printed for a failed command."""
    if isinstance(exc, ProviderError):
        err: Dict[str, Any] = {
            "code": exc.code.value,
            "message": exc.message,
            "provider": exc.provider,
        }
        if exc.status is not None:
            err["status"] = exc.status
        if isinstance(exc, ConfigurationError) and exc.key:
            err["key"] = exc.key
        return {"error": err}
    if isinstance(exc, UnknownProviderError):
        return {"error": {"code": "unknown_provider", "message": str(exc)}}
    return {"error": {"code": "unknown", "message": str(exc)}}


def handle_providers(args: argparse.Namespace, out: Optional[TextIO] = None) -> int:
    """Print the metadata of every registered provider."""
    _emit([m.to_dict() for m in ProviderFactory.all_metadata()], out)
    return 0


async def _fetch_models(provider: str, store: ConfigStore) -> Dict[str, Any]:
    async with ProviderFactory.create(provider, store=store) as adapter:
        models = await adapter.fetch_supported_models()
    meta = ProviderFactory.metadata(provider)
    return {
        "provider": meta.name,
        "live": models is not None,
        "models": models if models is not None else list(meta.known_model_names()),
    }


def handle_models(
    args: argparse.Namespace, store: Optional[ConfigStore] = None, out: Optional[TextIO] = None
) -> int:
    """Print the live model listing, falling back to known models when unsupported."""
    result = asyncio.run(_fetch_models(args.provider, store or default_config_store(args.config_file)))
    log_event(_logger, "cli.models", provider=result["provider"], count=len(result["models"]))
    _emit(result, out)
    return 0


async def _chat(args: argparse.Namespace, store: ConfigStore) -> Dict[str, Any]:
    async with ProviderFactory.create(args.provider, args.model, store=store) as adapter:
        message, usage = await adapter.complete(args.system, [Message.user(args.prompt)])
    return {
        "provider": adapter.provider_name,
        "model": usage.model,
        "text": message.as_concat_text(),
        "tool_requests": [
            {"id": r.id, "name": r.name, "arguments": r.arguments, "error": r.error}
            for r in message.tool_requests()
        ],
        "usage": usage.usage.to_dict(),
    }


def handle_chat(
    args: argparse.Namespace, store: Optional[ConfigStore] = None, out: Optional[TextIO] = None
) -> int:
    """Run one completion with ``--prompt`` and print the reply with usage."""
    result = asyncio.run(_chat(args, store or default_config_store(args.config_file)))
    _emit(result, out)
    return 0


def run_command(
    args: argparse.Namespace,
    store: Optional[ConfigStore] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Dispatch ``args.cmd`` and convert failures into the JSON error contract."""
    try:
        if args.cmd == "providers":
            return handle_providers(args, out=out)
        if args.cmd == "models":
            return handle_models(args, store=store, out=out)
        if args.cmd == "chat":
            return handle_chat(args, store=store, out=out)
        raise ValueError(f"unknown command {args.cmd!r}")
    except (ProviderError, UnknownProviderError, ValueError) as e:
        payload = error_payload(e)
        log_event(_logger, "cli.error", command=args.cmd, **payload["error"])
        _emit(payload, err or sys.stderr)
        return 1


__all__ = [
    "error_payload",
    "handle_providers",
    "handle_models",
    "handle_chat",
    "run_command",
]
