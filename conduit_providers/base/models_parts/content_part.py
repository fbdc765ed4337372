"""
Message content items shared by every provider adapter.

A `Message` carries an ordered list of content items. Each item is a small
frozen dataclass so messages can be compared, hashed into sets by callers,
and re-sent verbatim across retry attempts.

Content kinds:
    - ``TextContent``: plain text.
    - ``ImageContent``: base64 image data with its MIME type.
    - ``ToolRequest``: a tool invocation requested by the assistant. When the
      backend produced arguments that could not be parsed, ``error`` explains
      why and ``arguments`` is empty.
    - ``ToolResponse``: the caller's result for a prior ``ToolRequest``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union


ContentPartType = Literal["text", "image", "tool_request", "tool_response"]


@dataclass(frozen=True)
class TextContent:
    """Plain text content."""

    text: str
    type: ContentPartType = field(default="text", init=False)


@dataclass(frozen=True)
class ImageContent:
    """Inline image content.

    Attributes:
        data: Base64-encoded image bytes (no ``data:`` prefix).
        mime_type: MIME type such as ``"image/png"``.
    """

    data: str
    mime_type: str
    type: ContentPartType = field(default="image", init=False)


@dataclass(frozen=True)
class ToolRequest:
    """A tool call requested by the model.

    Attributes:
        id: Backend-assigned call identifier, echoed by the matching response.
        name: Tool name.
        arguments: Parsed JSON arguments.
        error: Set when the backend's arguments could not be interpreted.
    """

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    type: ContentPartType = field(default="tool_request", init=False)

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.error))


@dataclass(frozen=True)
class ToolResponse:
    """Result of running a tool, sent back to the model."""

    id: str
    output: str
    is_error: bool = False
    type: ContentPartType = field(default="tool_response", init=False)


ContentPart = Union[TextContent, ImageContent, ToolRequest, ToolResponse]


__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextContent",
    "ImageContent",
    "ToolRequest",
    "ToolResponse",
]
