"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content is an ordered list of content items (see ``content_part``);
helpers cover the common construction and inspection needs.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import List, Literal

from .content_part import ContentPart, ImageContent, TextContent, ToolRequest, ToolResponse


# Conversation roles. The system prompt travels separately from the messages.
Role = Literal["user", "assistant"]


@dataclass
class Message:
    """A chat message used by provider-agnostic DTOs.

    Summary:
        Represents a normalized chat message. Provider codecs map
        backend-specific message shapes into this DTO and back.

    Attributes:
        role: The role of the message author (``"user"`` or ``"assistant"``).
        content: Ordered content items.
        created: Creation time in epoch seconds.

    Methods:
        with_text / with_image / with_tool_request / with_tool_response:
            Return a copy with one more content item appended.
        as_concat_text: Join all text items for logging or flat backends.
        tool_requests: Return the tool requests carried by the message.
    """

    role: Role
    content: List[ContentPart] = field(default_factory=list)
    created: int = field(default_factory=lambda: int(time.time()))

    @classmethod
    def user(cls, text: str | None = None) -> "Message":
        """Create a user message, optionally seeded with text."""
        msg = cls(role="user")
        return msg.with_text(text) if text is not None else msg

    @classmethod
    def assistant(cls, text: str | None = None) -> "Message":
        """Create an assistant message, optionally seeded with text."""
        msg = cls(role="assistant")
        return msg.with_text(text) if text is not None else msg

    def _with(self, part: ContentPart) -> "Message":
        return replace(self, content=[*self.content, part])

    def with_text(self, text: str) -> "Message":
        return self._with(TextContent(text))

    def with_image(self, data: str, mime_type: str) -> "Message":
        return self._with(ImageContent(data=data, mime_type=mime_type))

    def with_tool_request(self, id: str, name: str, arguments: dict | None = None) -> "Message":  # noqa: A002
        return self._with(ToolRequest(id=id, name=name, arguments=dict(arguments or {})))

    def with_tool_response(self, id: str, output: str, *, is_error: bool = False) -> "Message":  # noqa: A002
        return self._with(ToolResponse(id=id, output=output, is_error=is_error))

    def as_concat_text(self) -> str:
        """Return the text items joined with newlines."""
        return "\n".join(p.text for p in self.content if isinstance(p, TextContent))

    def tool_requests(self) -> List[ToolRequest]:
        return [p for p in self.content if isinstance(p, ToolRequest)]

    def tool_responses(self) -> List[ToolResponse]:
        return [p for p in self.content if isinstance(p, ToolResponse)]


__all__ = [
    "Message",
    "Role",
]
