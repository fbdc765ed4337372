"""Unified configuration layer for providers.

Goals
-----
* Treat process-wide configuration as an injected collaborator: adapters take a
  :class:`ConfigStore` and never read the environment directly.
* Merge sources in a predictable order for the default store:
    1. Environment variables (optionally seeded from ``.env``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``CONDUIT_CONFIG_FILE``
* Keep credential handling strict: required secrets are validated at adapter
  construction, before any network access.

Key Conventions
---------------
Each provider publishes its keys through ``ProviderMetadata.config_keys``,
e.g. ``SWISS_AI_API_KEY`` (required, secret) and ``SWISS_AI_HOST`` (optional,
defaults to the public API host).

External Config File (Optional)
-------------------------------
If ``CONDUIT_CONFIG_FILE`` names a file, it is read as a flat mapping, JSON
first and YAML second:

```
SWISS_AI_HOST: https://proxy.internal.example
XAI_HOST: https://api.x.ai
```

Public API
----------
* default_config_store() -> ConfigStore
* require_secret(store, key, provider=...) -> str
* get_param(store, key, default) -> str | None
"""
from __future__ import annotations

import os
from typing import Optional

from .env import EnvConfigStore, is_placeholder
from .store import (
    ChainedConfigStore,
    ConfigStore,
    FileConfigStore,
    InMemoryConfigStore,
    get_param,
    require_secret,
)

CONFIG_FILE_ENV = "CONDUIT_CONFIG_FILE"


def default_config_store(config_file: Optional[str] = None) -> ConfigStore:
    """Return the standard store: environment first, then the optional config file.

    Parameters
    ----------
    config_file:
        Explicit config file path; falls back to ``CONDUIT_CONFIG_FILE``.
    """
    env_store = EnvConfigStore()
    path = config_file or os.getenv(CONFIG_FILE_ENV)
    if not path:
        return env_store
    return ChainedConfigStore(env_store, FileConfigStore(path))


__all__ = [
    "CONFIG_FILE_ENV",
    "ConfigStore",
    "EnvConfigStore",
    "InMemoryConfigStore",
    "FileConfigStore",
    "ChainedConfigStore",
    "default_config_store",
    "require_secret",
    "get_param",
    "is_placeholder",
]
