"""conduit_providers.config.env
===========================

Environment-backed configuration source.

Purpose
-------
- Read provider configuration (credentials, host overrides) from the process
  environment, optionally seeded from a ``.env`` file.
- Provide the placeholder heuristic shared by every store so values such as
  ``changeme`` never count as real credentials.

Design Notes
------------
- The ``.env`` loader is a tiny KEY=VALUE parser with no external dependency.
  It runs at most once per store instance and only fills variables that are
  unset or hold a placeholder.
- The store holds a reference to a mapping (``os.environ`` by default) so
  tests can inject a plain dict.

Failure Modes
-------------
- Lookups never raise; absent keys return ``None``. Callers decide whether an
  absent key is fatal (see :func:`conduit_providers.config.require_secret`).
"""

from __future__ import annotations

import os
from typing import MutableMapping, Optional


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'your-api-key', or is
    wrapped in angle brackets (``<token>``). The check is case-insensitive and
    resilient to surrounding spaces.

    Parameters
    ----------
    val: Optional[str]
        The value to evaluate.

    Returns
    -------
    bool
        True when the value is considered a placeholder.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "your-api-key" in v
        or (v.startswith("<") and v.endswith(">"))
    )


def _parse_dotenv_line(line: str) -> Optional[tuple[str, str]]:
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export "):]
    k, v = line.split("=", 1)
    k = k.strip()
    v = v.strip().strip('"').strip("'")
    return (k, v) if k else None


class EnvConfigStore:
    """Config store reading from environment variables.

    Parameters
    ----------
    environ:
        Mapping to read from; defaults to ``os.environ``.
    dotenv_path:
        Optional ``.env`` file loaded on first lookup. Defaults to the
        ``DOTENV_FILE`` variable, then ``.env`` in the working directory.
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        dotenv_path: Optional[str] = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._dotenv_path = dotenv_path
        self._dotenv_loaded = False

    def _load_dotenv_once(self) -> None:
        """Parse KEY=VALUE lines into the environment mapping once.

        Overrides existing variables only if their current values appear to be
        placeholders.
        """
        if self._dotenv_loaded:
            return
        self._dotenv_loaded = True
        path = self._dotenv_path or self._environ.get("DOTENV_FILE") or ".env"
        if not os.path.isfile(path):
            return
        with open(path, "r", encoding="utf-8") as fh:
            for raw in fh:
                parsed = _parse_dotenv_line(raw)
                if parsed is None:
                    continue
                k, v = parsed
                if k not in self._environ or is_placeholder(self._environ.get(k)):
                    self._environ[k] = v

    def get(self, name: str) -> Optional[str]:
        """Return the environment value for ``name`` or ``None`` when unset/blank."""
        self._load_dotenv_once()
        val = self._environ.get(name)
        if val is None or not val.strip():
            return None
        return val

    def __repr__(self) -> str:
        return f"EnvConfigStore(dotenv_path={self._dotenv_path!r})"


__all__ = [
    "EnvConfigStore",
    "is_placeholder",
]
