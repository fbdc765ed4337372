"""Provider CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from ...config import ConfigStore
from .cli_actions import run_command
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, store: Optional[ConfigStore] = None) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.
	store: Optional[ConfigStore]
		Config store override; defaults to environment plus optional file.

	Returns
	-------
	int
		Process exit code (0 success, 1 on a provider or configuration error).
	"""
	args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
	if args.log_level:
		configure_logger(level=args.log_level)
	return run_command(args, store=store)


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
