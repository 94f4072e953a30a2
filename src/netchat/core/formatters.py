"""Pure functions over messages. No I/O, fully unit-testable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from netchat.core.types import NETWORK_TYPE, TEXT_TYPE, TOOL_TYPE_PREFIX, PartKind
from netchat.parts.classifier import (
    classify,
    field_value,
    is_network_part,
    is_text_part,
    part_type,
)
from netchat.parts.models import Message


def message_text(message: Message, separator: str = "") -> str:
    """
    Concatenate the text parts of a message.

    Args:
        message: Message to read
        separator: Joiner between text parts ("" keeps streamed chunks intact)

    Returns:
        Combined text, empty if the message has no text parts
    """
    return separator.join(
        field_value(part, "text", "") for part in message.parts if is_text_part(part)
    )


def network_output_text(part: Any) -> str | None:
    """Final output text of a network trace part, if it has one."""
    if not is_network_part(part):
        return None
    data = field_value(part, "data")
    output = field_value(data, "output") if data is not None else None
    if output is None or output == "":
        return None
    return str(output)


def has_text_part(parts: Iterable[Any]) -> bool:
    """Whether any part carries the ``text`` discriminant, empty or not."""
    return any(part_type(p) == TEXT_TYPE for p in parts)


def has_renderable_content(message: Message) -> bool:
    """
    Whether a live message has anything worth showing.

    Unlike settled history, reasoning counts here: it is visible while the
    message streams.
    """
    for part in message.parts:
        kind = classify(part)
        if kind is PartKind.TEXT:
            if str(field_value(part, "text", "")).strip():
                return True
        elif kind in (PartKind.REASONING, PartKind.NETWORK, PartKind.DYNAMIC_TOOL):
            return True
        elif (part_type(part) or "").startswith(TOOL_TYPE_PREFIX):
            return True
    return False


@dataclass(frozen=True)
class MessageSummary:
    """Commonly needed per-message facts, computed once."""

    has_text: bool
    tool_count: int
    has_network: bool


def summarize_message(message: Message) -> MessageSummary:
    types = [part_type(p) or "" for p in message.parts]
    return MessageSummary(
        has_text=has_text_part(message.parts),
        tool_count=sum(1 for t in types if t.startswith(TOOL_TYPE_PREFIX)),
        has_network=NETWORK_TYPE in types,
    )
