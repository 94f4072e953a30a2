"""
History normalization - makes a stored thread look like the live stream did.

Stages, applied in order to the whole conversation:

    A. strip_ephemeral_parts   drop reasoning, scrub task.reason from network steps
    B. drop_non_displayable    completion checks, serialized network payloads,
                               messages with nothing left to show
    C. collapse_network_turns  keep only the first message of each run of
                               per-step snapshots the storage layer wrote
                               for one agent-network turn
    D. relative order of retained messages is preserved throughout

The pipeline is idempotent: normalizing its own output changes nothing.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from netchat.core.types import (
    DYNAMIC_TOOL_TYPE,
    NETWORK_MESSAGE_MARKER,
    NETWORK_TYPE,
    REASONING_TYPE,
    TEXT_TYPE,
)
from netchat.history.parser import parse_messages
from netchat.parts.classifier import (
    field_value,
    is_displayable_part,
    part_type,
)
from netchat.parts.models import GenericPart, Message, NetworkTracePart, Part

logger = logging.getLogger(__name__)


def is_network_message(text: str) -> bool:
    """Whether text is a serialized network-execution payload, not user content."""
    return NETWORK_MESSAGE_MARKER in text


# --- Stage A ---


def _scrub_step_dict(step: Any) -> Any:
    if not isinstance(step, dict):
        return step
    task = step.get("task")
    if not isinstance(task, dict) or "reason" not in task:
        return step
    return {**step, "task": {k: v for k, v in task.items() if k != "reason"}}


def strip_network_reasons(part: Part) -> Part:
    """
    Remove ``task.reason`` from every step of a network part.

    Steps, statuses and tool results are kept as they are; only the internal
    routing rationale goes. Other parts are returned unchanged.
    """
    if isinstance(part, NetworkTracePart):
        if not any(s.task is not None and s.task.reason is not None for s in part.data.steps):
            return part
        steps = [
            step.model_copy(update={"task": step.task.model_copy(update={"reason": None})})
            if step.task is not None and step.task.reason is not None
            else step
            for step in part.data.steps
        ]
        return part.model_copy(update={"data": part.data.model_copy(update={"steps": steps})})

    if part_type(part) == NETWORK_TYPE:
        # Network payload that did not validate; scrub the raw shape instead
        wire = part.to_wire()
        data = wire.get("data")
        if isinstance(data, dict) and isinstance(data.get("steps"), list):
            wire["data"] = {**data, "steps": [_scrub_step_dict(s) for s in data["steps"]]}
            return GenericPart.model_validate(wire)
    return part


def strip_ephemeral_parts(messages: list[Message]) -> list[Message]:
    """Stage A: reasoning is streaming-only and never resurfaces from storage."""
    result: list[Message] = []
    for message in messages:
        parts = [
            strip_network_reasons(part)
            for part in message.parts
            if part_type(part) != REASONING_TYPE
        ]
        if len(parts) != len(message.parts):
            logger.debug(
                f"Message {message.id}: stripped {len(message.parts) - len(parts)} reasoning part(s)"
            )
        result.append(message.model_copy(update={"parts": parts}))
    return result


# --- Stage B ---


def is_completion_check(message: Message) -> bool:
    """Internal network routing completion check, never shown to users."""
    metadata = message.metadata
    if metadata is None:
        return False
    return metadata.mode == "network" and metadata.completion_result is not None


def _first_text(message: Message) -> str | None:
    for part in message.parts:
        if part_type(part) == TEXT_TYPE:
            text = field_value(part, "text")
            return text if isinstance(text, str) else None
    return None


def is_displayable_message(message: Message) -> bool:
    if is_completion_check(message):
        return False
    text = _first_text(message)
    if text and is_network_message(text):
        return False
    return any(is_displayable_part(part) for part in message.parts)


def drop_non_displayable(messages: list[Message]) -> list[Message]:
    """Stage B: keep only messages with user-facing content."""
    kept = [m for m in messages if is_displayable_message(m)]
    if len(kept) != len(messages):
        logger.debug(f"Dropped {len(messages) - len(kept)} non-displayable message(s)")
    return kept


# --- Stage C ---


def _starts_network_run(message: Message) -> bool:
    return message.role == "assistant" and any(
        part_type(p) == DYNAMIC_TOOL_TYPE for p in message.parts
    )


def _continues_network_run(message: Message) -> bool:
    # Only dynamic-tool and text parts continue a run; any other part kind
    # belongs to a new turn
    if message.role != "assistant":
        return False
    return all(part_type(p) in (DYNAMIC_TOOL_TYPE, TEXT_TYPE) for p in message.parts)


def collapse_network_turns(messages: list[Message]) -> list[Message]:
    """
    Stage C: collapse consecutive snapshots of one agent-network turn.

    A run starts at an assistant message carrying a dynamic tool replay and
    extends over the following assistant messages made only of dynamic tool
    replays and text. The first message holds the complete reconstructed
    sub-conversation, so it is the one kept. Runs are never merged across a
    non-matching message.
    """
    result: list[Message] = []
    i = 0
    while i < len(messages):
        current = messages[i]
        result.append(current)
        i += 1
        if not _starts_network_run(current):
            continue

        run_end = i
        while run_end < len(messages) and _continues_network_run(messages[run_end]):
            run_end += 1
        if run_end > i:
            logger.debug(
                f"Collapsed {run_end - i} redundant message(s) after {current.id}"
            )
        i = run_end
    return result


# --- Pipeline ---


def normalize_history(messages: Iterable[Message | dict[str, Any]]) -> list[Message]:
    """
    Normalize a stored conversation for first display.

    Args:
        messages: Stored messages, as Message models or raw dicts

    Returns:
        Normalized messages in their original relative order. An empty or
        fully filtered conversation yields an empty list.
    """
    parsed = parse_messages(messages)
    stripped = strip_ephemeral_parts(parsed)
    displayable = drop_non_displayable(stripped)
    normalized = collapse_network_turns(displayable)
    logger.debug(f"Normalized history: {len(parsed)} -> {len(normalized)} message(s)")
    return normalized
