"""Token usage extraction helpers.

Centralizes *best-effort* extraction of token accounting from decoded
response payloads and converts backend-specific field names into the
canonical :class:`~conduit_providers.base.models.Usage` record.

Design Principles
-----------------
1. Non-Intrusive: a payload without a usable ``usage`` object yields ``None``
   rather than an exception. Adapters then substitute the zeroed ``Usage()``.
2. Coercion: counts are coerced with ``int``; negative values, booleans,
   non-finite floats and unparsable values become ``None``.
3. Derived Total: a missing total is derived only when both components are
   present, so partial data never looks complete.

Supported Shapes
----------------
OpenAI-compatible:
    ``usage.prompt_tokens``, ``usage.completion_tokens``, ``usage.total_tokens``
Anthropic-style (accepted by the same helper as a fallback):
    ``usage.input_tokens``, ``usage.output_tokens``
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..models import Usage


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce arbitrary value to a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return iv if iv >= 0 else None


def _first(usage: Mapping[str, Any], *names: str) -> Optional[int]:
    for name in names:
        val = _coerce_int(usage.get(name))
        if val is not None:
            return val
    return None


def extract_openai_token_usage(payload: Any) -> Optional[Usage]:
    """Return the :class:`Usage` reported in an OpenAI-style payload.

    Returns ``None`` when ``usage`` is absent, is not an object, or carries no
    recognizable count.
    """
    if not isinstance(payload, Mapping):
        return None
    usage_obj = payload.get("usage")
    if not isinstance(usage_obj, Mapping):
        return None
    usage = Usage.from_counts(
        _first(usage_obj, "prompt_tokens", "input_tokens"),
        _first(usage_obj, "completion_tokens", "output_tokens"),
        _first(usage_obj, "total_tokens"),
    )
    return None if usage.is_empty() else usage


__all__ = ["extract_openai_token_usage"]
