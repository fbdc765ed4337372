"""conduit_providers.config.defaults
===============================

Central place for small, stable default values used across the
conduit_providers package and its CLI. Hosts can be overridden through each
provider's host config key; everything else here is a plain constant.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep adapters and the CLI free of magic literals, improving readability and
  testability.

This module imports nothing from other packages, which avoids
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Wire protocol (OpenAI-compatible) ----
CHAT_COMPLETIONS_PATH = "v1/chat/completions"
MODELS_PATH = "v1/models"


# ---- Retry policy ----
RETRY_DEFAULT_MAX_ATTEMPTS = 3
RETRY_DEFAULT_INITIAL_DELAY_SECONDS = 1.0
RETRY_DEFAULT_BACKOFF_MULTIPLIER = 2.0
RETRY_DEFAULT_MAX_DELAY_SECONDS = 30.0


# ---- CLI Defaults ----
# Default provider selected by the CLI when none is specified.
PROVIDER_CLI_DEFAULT_PROVIDER = "swiss-ai"


# ---- Provider-specific sane defaults ----
# Swiss AI Platform (Llama models behind an OpenAI-compatible API).
SWISS_AI_API_HOST = "https://api.swiss-ai-platform.ch"
SWISS_AI_DEFAULT_MODEL = "llama-3.3-70b-instruct"
SWISS_AI_KNOWN_MODELS = (
    "llama-3.3-70b-instruct",
    "llama-4-405b-instruct",
)
SWISS_AI_DOC_URL = "https://docs.swiss-ai-platform.ch/models"

# xAI (Grok)
XAI_API_HOST = "https://api.x.ai"
XAI_DEFAULT_MODEL = "grok-4"
XAI_KNOWN_MODELS = (
    "grok-4",
    "grok-3",
    "grok-3-mini",
)
XAI_DOC_URL = "https://docs.x.ai/docs/models"

# Offline mock backend
MOCK_API_HOST = "http://mock.invalid"
MOCK_DEFAULT_MODEL = "mock-echo"
MOCK_KNOWN_MODELS = ("mock-echo",)


__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "MODELS_PATH",
    "RETRY_DEFAULT_MAX_ATTEMPTS",
    "RETRY_DEFAULT_INITIAL_DELAY_SECONDS",
    "RETRY_DEFAULT_BACKOFF_MULTIPLIER",
    "RETRY_DEFAULT_MAX_DELAY_SECONDS",
    "PROVIDER_CLI_DEFAULT_PROVIDER",
    "SWISS_AI_API_HOST",
    "SWISS_AI_DEFAULT_MODEL",
    "SWISS_AI_KNOWN_MODELS",
    "SWISS_AI_DOC_URL",
    "XAI_API_HOST",
    "XAI_DEFAULT_MODEL",
    "XAI_KNOWN_MODELS",
    "XAI_DOC_URL",
    "MOCK_API_HOST",
    "MOCK_DEFAULT_MODEL",
    "MOCK_KNOWN_MODELS",
]
