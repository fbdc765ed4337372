"""CLI parser construction for conduit-providers.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...config.defaults import PROVIDER_CLI_DEFAULT_PROVIDER


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``providers``, ``models`` and ``chat`` subcommands.
    """
    p = argparse.ArgumentParser(
        prog="conduit-providers", description="Inspect and exercise LLM provider adapters"
    )
    p.add_argument("--log-level", default=None, help="Override CONDUIT_LOG_LEVEL (e.g. DEBUG)")
    p.add_argument("--config-file", default=None, help="JSON/YAML config file (CONDUIT_CONFIG_FILE)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("providers", help="List provider metadata as JSON")

    p_models = sub.add_parser("models", help="Fetch the live model listing of a provider")
    p_models.add_argument("provider", nargs="?", default=PROVIDER_CLI_DEFAULT_PROVIDER)

    p_chat = sub.add_parser("chat", help="Run a single chat completion")
    p_chat.add_argument("provider", nargs="?", default=PROVIDER_CLI_DEFAULT_PROVIDER)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--system", default="")

    return p
