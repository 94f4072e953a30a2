"""
Live stream events using tagged union pattern.

Events are strongly typed using discriminated unions, enabling type-safe
pattern matching in the dispatch loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from netchat.core.types import StreamStatus


@dataclass
class MessageStarted:
    """A new message begins streaming."""

    type: Literal["message_started"] = "message_started"
    message_id: str | None = None
    role: str = "assistant"
    metadata: dict[str, Any] | None = None


@dataclass
class PartAppended:
    """A new part arrived for a message."""

    type: Literal["part_appended"] = "part_appended"
    message_id: str | None = None
    part: Any = None
    role: str = "assistant"


@dataclass
class PartUpdated:
    """An existing part changed in place (e.g. a network step finished)."""

    type: Literal["part_updated"] = "part_updated"
    message_id: str | None = None
    part_index: int = 0
    part: Any = None


@dataclass
class StatusChanged:
    """The conversation's stream status changed (e.g. streaming -> ready)."""

    type: Literal["status_changed"] = "status_changed"
    status: StreamStatus = StreamStatus.READY


# Union type for all stream events
StreamEvent = MessageStarted | PartAppended | PartUpdated | StatusChanged
