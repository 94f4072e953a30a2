"""Inputs handed to every renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from netchat.core.types import StreamStatus


@dataclass(frozen=True)
class RenderContext:
    """
    Everything a renderer may base its decision on.

    Cross-part facts (``has_text_part``, ``all_parts``) are passed in
    explicitly so renderers stay pure functions of their context.
    """

    part: Any
    part_index: int = 0
    is_last_message: bool = False
    status: StreamStatus = StreamStatus.READY
    has_text_part: bool = False
    all_parts: list[Any] = field(default_factory=list)

    @property
    def is_streaming(self) -> bool:
        return self.status == StreamStatus.STREAMING


def reasoning_visible(*, is_last_message: bool, status: StreamStatus) -> bool:
    """Reasoning shows only on the last message while it is actively streaming."""
    return is_last_message and status == StreamStatus.STREAMING
