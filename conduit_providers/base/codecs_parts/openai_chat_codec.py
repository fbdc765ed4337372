"""
OpenAI-compatible chat-completions codec.

Purpose
-------
Translate between the agnostic ``Message``/``Tool`` model and the JSON used by
``/v1/chat/completions`` and ``/v1/models`` on OpenAI-compatible gateways
(Swiss AI Platform, xAI and most self-hosted servers).

Request shape
-------------
- System prompt becomes the first ``{"role": "system"}`` message when non-empty.
- Text-only messages use a plain string ``content``; messages with images use
  the list form with ``image_url`` data URLs.
- Assistant tool requests become ``tool_calls`` with JSON-string arguments.
- Each tool response becomes its own ``{"role": "tool"}`` message placed after
  the message that carried it. Failed results are prefixed with
  ``TOOL_ERROR_PREFIX``.
- Tools are sent as ``{"type": "function", "function": {...}}`` entries.

Response shape
--------------
``choices[0].message`` is required; without it no message can be built and
:class:`ResponseShapeError` is raised. ``usage`` is optional telemetry and its
absence yields ``None``. Tool-call arguments that are not a JSON object do not
fail the call: the resulting ``ToolRequest`` carries an ``error`` instead.

Failure modes
-------------
- :class:`MalformedInputError` for unknown roles, invalid or duplicate tool
  names, non-object tool schemas, unsupported image types, tool arguments
  that are not JSON-serializable and tool responses without an id or with
  non-string output.
- :class:`ResponseShapeError` for missing ``choices[0].message`` or a model
  listing without a ``data`` array.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..errors import (
    ErrorCode,
    MalformedInputError,
    ProviderError,
    ResponseShapeError,
    error_from_status,
)
from ..models import (
    ContentPart,
    ImageContent,
    Message,
    ModelConfig,
    TextContent,
    Tool,
    ToolRequest,
    ToolResponse,
    Usage,
)
from ..tokens import extract_openai_token_usage

_TOOL_NAME_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
SUPPORTED_IMAGE_TYPES = frozenset({"image/png", "image/jpeg", "image/gif", "image/webp"})
# Prepended to failed tool results; the wire format has no error flag.
TOOL_ERROR_PREFIX = "Error: "

# Error ``type``/``code`` strings some gateways return inside a 2xx body.
_ERROR_TYPE_STATUS: Dict[str, int] = {
    "invalid_api_key": 401,
    "authentication_error": 401,
    "permission_error": 403,
    "rate_limit_exceeded": 429,
    "rate_limit_error": 429,
    "insufficient_quota": 429,
    "invalid_request_error": 400,
    "not_found_error": 404,
    "server_error": 500,
    "overloaded_error": 503,
}


class OpenAIChatCodec:
    """Codec for the OpenAI chat-completions wire format.

    Parameters
    ----------
    provider:
        Provider name stamped on raised errors.
    """

    def __init__(self, provider: str = "openai-compatible") -> None:
        self.provider = provider

    # ------------------------------------------------------------------ encode
    def encode(
        self,
        model_config: ModelConfig,
        system: str,
        messages: Sequence[Message],
        tools: Sequence[Tool] = (),
    ) -> Dict[str, Any]:
        model = model_config.model_name
        wire_messages: List[Dict[str, Any]] = []
        if system:
            wire_messages.append({"role": "system", "content": system})
        for msg in messages:
            wire_messages.extend(self._encode_message(msg, model))

        payload: Dict[str, Any] = {"model": model, "messages": wire_messages}
        if tools:
            payload["tools"] = self._encode_tools(tools, model)
        if model_config.temperature is not None:
            payload["temperature"] = model_config.temperature
        if model_config.max_tokens is not None:
            payload["max_tokens"] = model_config.max_tokens
        return payload

    def _malformed(self, message: str, model: str) -> MalformedInputError:
        return MalformedInputError(message, provider=self.provider, model=model)

    def _encode_message(self, msg: Message, model: str) -> List[Dict[str, Any]]:
        if msg.role not in ("user", "assistant"):
            raise self._malformed(f"unsupported message role {msg.role!r}", model)

        parts: List[Dict[str, Any]] = []
        has_image = False
        tool_calls: List[Dict[str, Any]] = []
        tool_messages: List[Dict[str, Any]] = []
        for part in msg.content:
            if isinstance(part, TextContent):
                parts.append({"type": "text", "text": part.text})
            elif isinstance(part, ImageContent):
                if part.mime_type not in SUPPORTED_IMAGE_TYPES:
                    raise self._malformed(f"unsupported image type {part.mime_type!r}", model)
                has_image = True
                parts.append(
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{part.mime_type};base64,{part.data}"},
                    }
                )
            elif isinstance(part, ToolRequest):
                if msg.role != "assistant":
                    raise self._malformed("tool requests are only valid on assistant messages", model)
                tool_calls.append(self._encode_tool_call(part, model))
            elif isinstance(part, ToolResponse):
                tool_messages.append(self._encode_tool_response(part, model))
            else:
                raise self._malformed(f"unsupported content item {type(part).__name__}", model)

        out: List[Dict[str, Any]] = []
        if parts or tool_calls or not tool_messages:
            entry: Dict[str, Any] = {"role": msg.role}
            if has_image:
                entry["content"] = parts
            elif parts:
                entry["content"] = "\n".join(p["text"] for p in parts)
            else:
                entry["content"] = None if tool_calls else ""
            if tool_calls:
                entry["tool_calls"] = tool_calls
            out.append(entry)
        out.extend(tool_messages)
        return out

    def _encode_tool_call(self, req: ToolRequest, model: str) -> Dict[str, Any]:
        if not req.id or not _TOOL_NAME_RE.match(req.name or ""):
            raise self._malformed(f"invalid tool request {req.name!r}", model)
        try:
            arguments = json.dumps(req.arguments, sort_keys=True, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise self._malformed(f"tool request {req.name!r} arguments are not JSON: {e}", model) from e
        return {
            "id": req.id,
            "type": "function",
            "function": {"name": req.name, "arguments": arguments},
        }

    def _encode_tool_response(self, resp: ToolResponse, model: str) -> Dict[str, Any]:
        if not resp.id:
            raise self._malformed("tool response requires a non-empty id", model)
        if not isinstance(resp.output, str):
            raise self._malformed(f"tool response {resp.id!r} output must be a string", model)
        content = f"{TOOL_ERROR_PREFIX}{resp.output}" if resp.is_error else resp.output
        return {"role": "tool", "tool_call_id": resp.id, "content": content}

    def _encode_tools(self, tools: Sequence[Tool], model: str) -> List[Dict[str, Any]]:
        seen: set[str] = set()
        encoded: List[Dict[str, Any]] = []
        for tool in tools:
            if not _TOOL_NAME_RE.match(tool.name or ""):
                raise self._malformed(f"invalid tool name {tool.name!r}", model)
            if tool.name in seen:
                raise self._malformed(f"duplicate tool name {tool.name!r}", model)
            seen.add(tool.name)
            schema = tool.input_schema
            if not isinstance(schema, Mapping) or schema.get("type", "object") != "object":
                raise self._malformed(f"tool {tool.name!r} input schema must be an object schema", model)
            encoded.append(
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": dict(schema),
                    },
                }
            )
        return encoded

    # ------------------------------------------------------------------ decode
    def decode(self, payload: Dict[str, Any]) -> Tuple[Message, Optional[Usage]]:
        model = self.get_model(payload)
        choices = payload.get("choices") if isinstance(payload, Mapping) else None
        first = choices[0] if isinstance(choices, list) and choices else None
        wire_msg = first.get("message") if isinstance(first, Mapping) else None
        if not isinstance(wire_msg, Mapping):
            raise ResponseShapeError(
                "response is missing choices[0].message", provider=self.provider, model=model
            )
        if "content" not in wire_msg and not wire_msg.get("tool_calls"):
            raise ResponseShapeError(
                "response message has neither content nor tool_calls",
                provider=self.provider,
                model=model,
            )

        content: List[ContentPart] = []
        content.extend(self._decode_content(wire_msg.get("content")))
        for call in wire_msg.get("tool_calls") or []:
            content.append(self._decode_tool_call(call))

        message = Message(role="assistant", content=content)
        return message, extract_openai_token_usage(payload)

    @staticmethod
    def _decode_content(raw: Any) -> List[ContentPart]:
        if isinstance(raw, str):
            return [TextContent(raw)] if raw else []
        if isinstance(raw, list):
            out: List[ContentPart] = []
            for item in raw:
                if isinstance(item, Mapping) and item.get("type") == "text" and isinstance(item.get("text"), str):
                    out.append(TextContent(item["text"]))
            return out
        return []

    @staticmethod
    def _decode_tool_call(call: Any) -> ToolRequest:
        if not isinstance(call, Mapping):
            return ToolRequest(id="", name="", error="tool call is not an object")
        fn = call.get("function") if isinstance(call.get("function"), Mapping) else {}
        call_id = str(call.get("id") or "")
        name = str(fn.get("name") or "")
        raw_args = fn.get("arguments")
        if not _TOOL_NAME_RE.match(name):
            return ToolRequest(id=call_id, name=name, error=f"invalid tool name {name!r}")
        if raw_args in (None, ""):
            return ToolRequest(id=call_id, name=name)
        if isinstance(raw_args, Mapping):
            return ToolRequest(id=call_id, name=name, arguments=dict(raw_args))
        try:
            args = json.loads(raw_args)
        except (TypeError, ValueError) as e:
            return ToolRequest(id=call_id, name=name, error=f"could not parse tool arguments: {e}")
        if not isinstance(args, dict):
            return ToolRequest(id=call_id, name=name, error="tool arguments are not a JSON object")
        return ToolRequest(id=call_id, name=name, arguments=args)

    # ---------------------------------------------------------------- metadata
    def check_error(self, payload: Dict[str, Any]) -> None:
        err = payload.get("error") if isinstance(payload, Mapping) else None
        if not err:
            return
        if not isinstance(err, Mapping):
            raise ProviderError(code=ErrorCode.UNKNOWN, message=str(err), provider=self.provider)
        message = str(err.get("message") or "backend returned an error")
        status = _status_from_error(err)
        if status is None:
            raise ProviderError(code=ErrorCode.UNKNOWN, message=message, provider=self.provider)
        raise error_from_status(status, message, provider=self.provider, model=self.get_model(payload))

    @staticmethod
    def get_model(payload: Dict[str, Any]) -> Optional[str]:
        model = payload.get("model") if isinstance(payload, Mapping) else None
        return model if isinstance(model, str) and model else None

    def decode_model_listing(self, payload: Dict[str, Any]) -> List[str]:
        data = payload.get("data") if isinstance(payload, Mapping) else None
        if not isinstance(data, list):
            raise ResponseShapeError(
                "Missing or invalid `data` field in response", provider=self.provider
            )
        return [
            entry["id"]
            for entry in data
            if isinstance(entry, Mapping) and isinstance(entry.get("id"), str) and entry["id"]
        ]

    def __repr__(self) -> str:
        return f"OpenAIChatCodec(provider={self.provider!r})"


def _status_from_error(err: Mapping[str, Any]) -> Optional[int]:
    for key in ("status", "code"):
        val = err.get(key)
        if isinstance(val, int) and not isinstance(val, bool) and 400 <= val < 600:
            return val
        if isinstance(val, str) and val.isdigit() and 400 <= int(val) < 600:
            return int(val)
    for key in ("type", "code"):
        val = err.get(key)
        if isinstance(val, str) and val in _ERROR_TYPE_STATUS:
            return _ERROR_TYPE_STATUS[val]
    return None


__all__ = ["OpenAIChatCodec", "SUPPORTED_IMAGE_TYPES", "TOOL_ERROR_PREFIX"]
