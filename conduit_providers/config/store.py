"""Configuration store contract and non-environment implementations.

Adapters never reach into a global settings singleton. They receive a
:class:`ConfigStore` at construction time and query it by key name, which
keeps them testable with :class:`InMemoryConfigStore`.

Stores
------
* :class:`InMemoryConfigStore`: dict-backed; the fake used by tests.
* :class:`FileConfigStore`: flat JSON or YAML mapping loaded lazily.
* :class:`ChainedConfigStore`: first store that has the key wins.

Helpers
-------
* :func:`require_secret`: fetch a required credential or raise
  :class:`ConfigurationError` naming the key (never the value).
* :func:`get_param`: fetch an optional value with a default.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import yaml

from ..base.errors import ConfigurationError
from .env import is_placeholder


@runtime_checkable
class ConfigStore(Protocol):
    """Read-only key/value source for provider configuration."""

    def get(self, name: str) -> Optional[str]:
        """Return the value stored under ``name`` or ``None`` when absent."""
        ...


class InMemoryConfigStore:
    """Config store backed by a plain mapping."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def __repr__(self) -> str:
        return f"InMemoryConfigStore(keys={sorted(self._values)})"


class FileConfigStore:
    """Config store reading a flat mapping from a JSON or YAML file.

    JSON is attempted first; YAML is the fallback. A missing file behaves as
    an empty store. Non-scalar values are ignored.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._cache: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._cache is not None:
            return self._cache
        data: Any = {}
        if self._path.is_file():
            text = self._path.read_text(encoding="utf-8")
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            data = {}
        self._cache = {
            str(k): str(v) for k, v in data.items() if isinstance(v, (str, int, float, bool))
        }
        return self._cache

    def get(self, name: str) -> Optional[str]:
        return self._load().get(name)

    def __repr__(self) -> str:
        return f"FileConfigStore(path={str(self._path)!r})"


class ChainedConfigStore:
    """Query several stores in order and return the first non-empty value."""

    def __init__(self, *stores: ConfigStore) -> None:
        self._stores = stores

    def get(self, name: str) -> Optional[str]:
        for store in self._stores:
            val = store.get(name)
            if val is not None and str(val).strip():
                return val
        return None

    def __repr__(self) -> str:
        return f"ChainedConfigStore({', '.join(repr(s) for s in self._stores)})"


def require_secret(store: ConfigStore, key: str, *, provider: str) -> str:
    """Return a required credential or raise :class:`ConfigurationError`.

    Blank and placeholder values count as absent.
    """
    val = store.get(key)
    if val is None or not val.strip() or is_placeholder(val):
        raise ConfigurationError(
            f"missing required configuration key {key}",
            provider=provider,
            key=key,
        )
    return val.strip()


def get_param(store: ConfigStore, key: str, default: Optional[str] = None) -> Optional[str]:
    """Return an optional config value, falling back to ``default``."""
    val = store.get(key)
    if val is None or not val.strip():
        return default
    return val.strip()


__all__ = [
    "ConfigStore",
    "InMemoryConfigStore",
    "FileConfigStore",
    "ChainedConfigStore",
    "require_secret",
    "get_param",
]
