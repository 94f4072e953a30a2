"""
Live conversation state.

Holds the messages of one in-progress conversation and its stream status.
Parts are append-only; an existing slot may be replaced in place (a network
trace gaining steps or a tool gaining output), but parts are never reordered
or removed. Each change swaps in a new Message so earlier snapshots handed
to renderers stay untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from netchat.core.types import StreamStatus
from netchat.parts.classifier import parse_part
from netchat.parts.models import Message, MessageMetadata, Part

logger = logging.getLogger(__name__)


class LiveConversation:
    """Messages of one live conversation plus its stream status."""

    def __init__(
        self,
        messages: list[Message] | None = None,
        status: StreamStatus = StreamStatus.READY,
    ):
        self._messages: list[Message] = list(messages or [])
        self._index: dict[str, int] = {m.id: i for i, m in enumerate(self._messages)}
        self.status = StreamStatus(status)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def last_message(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def get(self, message_id: str) -> Message | None:
        index = self._index.get(message_id)
        return self._messages[index] if index is not None else None

    def is_last(self, message_id: str) -> bool:
        last = self.last_message
        return last is not None and last.id == message_id

    def set_status(self, status: StreamStatus | str) -> None:
        self.status = StreamStatus(status)

    def start_message(
        self,
        message_id: str,
        role: str = "assistant",
        metadata: dict[str, Any] | None = None,
    ) -> Message:
        """Open a message; an already-known id is returned unchanged."""
        existing = self.get(message_id)
        if existing is not None:
            return existing
        message = Message(
            id=message_id,
            role=role,
            parts=[],
            metadata=MessageMetadata.model_validate(metadata) if metadata else None,
        )
        self._index[message_id] = len(self._messages)
        self._messages.append(message)
        return message

    def _replace(self, message: Message) -> None:
        self._messages[self._index[message.id]] = message

    def append_part(
        self, message_id: str, raw_part: Any, role: str = "assistant"
    ) -> tuple[Message, int] | None:
        """
        Append a part to a message, opening the message if needed.

        Returns:
            The updated message and the new part's index, or None when the
            part is malformed and was not stored
        """
        part = parse_part(raw_part)
        if part is None:
            logger.debug(f"Message {message_id}: ignoring malformed part")
            return None

        message = self.start_message(message_id, role=role)
        updated = message.model_copy(update={"parts": [*message.parts, part]})
        self._replace(updated)
        return updated, len(updated.parts) - 1

    def update_part(
        self, message_id: str, part_index: int, raw_part: Any
    ) -> tuple[Message, int] | None:
        """Replace the part at an existing index. Unknown slots are ignored."""
        message = self.get(message_id)
        if message is None or not 0 <= part_index < len(message.parts):
            logger.warning(
                f"Message {message_id}: no part at index {part_index} to update"
            )
            return None

        part: Part | None = parse_part(raw_part)
        if part is None:
            logger.debug(f"Message {message_id}: ignoring malformed update")
            return None

        parts = list(message.parts)
        parts[part_index] = part
        updated = message.model_copy(update={"parts": parts})
        self._replace(updated)
        return updated, part_index
