"""
Tool description passed through to backends.

The adapter layer treats tools as opaque beyond format translation: name,
human description and JSON Schema for the input object.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Tool:
    """A callable capability the model may request."""

    name: str
    description: str = ""
    input_schema: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def __hash__(self) -> int:
        return hash((self.name, self.description))


__all__ = ["Tool"]
