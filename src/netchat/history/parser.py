"""
Stored thread parser - converts raw stored messages to Message models.

Records that fail validation (missing id, unknown role, parts that is not a
list) are skipped with a warning rather than failing the whole thread.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from netchat.parts.models import Message

logger = logging.getLogger(__name__)


def parse_message(raw: Any) -> Message | None:
    """
    Parse one stored message.

    Returns:
        The Message, or None if the record is unusable
    """
    if isinstance(raw, Message):
        return raw
    try:
        return Message.model_validate(raw)
    except ValidationError as e:
        record_id = raw.get("id") if isinstance(raw, dict) else None
        logger.warning(f"Skipping invalid message id={record_id}: {e.error_count()} error(s)")
        return None


def parse_messages(history: Iterable[Any]) -> list[Message]:
    """
    Parse a stored conversation.

    Example:
        >>> history = [
        ...     {"id": "m1", "role": "user", "parts": [{"type": "text", "text": "Hi"}]},
        ...     {"id": "m2", "role": "assistant", "parts": [{"no": "type"}]},
        ... ]
        >>> [len(m.parts) for m in parse_messages(history)]
        [1, 0]
    """
    messages: list[Message] = []
    for raw in history:
        message = parse_message(raw)
        if message is not None:
            messages.append(message)
    return messages
