"""Text extraction from model-provider response envelopes.

Provider envelopes change shape between API generations. Each known shape is
a variant of `ResponseEnvelope`; `classify_envelope` picks exactly one variant
and `extract_response_text` reads the text out of it. Anything that does not
match a known shape becomes `UnrecognizedEnvelope` instead of raising.

Known shapes::

    chat completions  {"choices": [{"message": {"content": "..."}}]}
    responses api     {"output": [{"content": [{"type": "output_text", "text": "..."}]}]}
                      or with "text": {"value": "..."} on the content item
    nested value      {"content": [{"type": "text", "text": {"value": "..."}}]}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

NESTED_TEXT_TYPES = {"text", "output_text"}


@dataclass(frozen=True)
class ChatCompletionEnvelope:
    text: str


@dataclass(frozen=True)
class ResponsesEnvelope:
    text: str


@dataclass(frozen=True)
class NestedTextValueEnvelope:
    text: str


@dataclass(frozen=True)
class UnrecognizedEnvelope:
    reason: str


ResponseEnvelope = (
    ChatCompletionEnvelope | ResponsesEnvelope | NestedTextValueEnvelope | UnrecognizedEnvelope
)


def classify_envelope(raw: Any) -> ResponseEnvelope:
    if not isinstance(raw, dict):
        return UnrecognizedEnvelope(reason=f"envelope is {type(raw).__name__}, not an object")

    try:
        if "choices" in raw:
            text = _chat_completion_text(raw)
            if text:
                return ChatCompletionEnvelope(text=text)
        if "output_text" in raw or "output" in raw:
            text = _responses_text(raw)
            if text:
                return ResponsesEnvelope(text=text)
        if "content" in raw or "data" in raw:
            text = _nested_value_text(raw)
            if text:
                return NestedTextValueEnvelope(text=text)
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        return UnrecognizedEnvelope(reason=f"structural access failed: {exc!r}")

    return UnrecognizedEnvelope(reason="no known text field found")


def extract_response_text(raw: Any) -> str | None:
    """Return the first literal text the model produced, or None."""
    envelope = classify_envelope(raw)
    if isinstance(envelope, UnrecognizedEnvelope):
        return None
    return envelope.text


def _chat_completion_text(raw: dict[str, Any]) -> str | None:
    content = raw["choices"][0]["message"]["content"]
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        for part in content:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                return part["text"]
    return None


def _responses_text(raw: dict[str, Any]) -> str | None:
    direct = raw.get("output_text")
    if isinstance(direct, str) and direct:
        return direct
    for item in raw.get("output") or []:
        for part in item.get("content") or []:
            if not isinstance(part, dict):
                continue
            text = part.get("text")
            if isinstance(text, dict) and part.get("type") in NESTED_TEXT_TYPES:
                text = text.get("value")
            if isinstance(text, str) and text:
                return text
    return None


def _nested_value_text(raw: dict[str, Any]) -> str | None:
    content = raw.get("content")
    if content is None:
        # Thread message listings wrap messages in a "data" array.
        content = raw["data"][0]["content"]
    first = content[0]
    if first.get("type") not in NESTED_TEXT_TYPES:
        return None
    value = first["text"]["value"]
    return value if isinstance(value, str) else None
