"""
Renderer registry - priority-ordered lookup from a part to its renderer.

Several entries may match the same part (a generic tool renderer and a
weather-specific one, say). The registry resolves that by priority, highest
first, with ties going to the key registered first. Re-registering a key
replaces its entry but keeps its original slot.

The registry holds configuration only, never per-conversation state, so one
instance can be shared by every conversation. Writes are copy-on-write:
readers always see a complete, immutable snapshot and never take the lock.

Example:
    registry = RendererRegistry()
    registry.register(
        RendererEntry(key="text", matcher=is_text_part, render=render_text, priority=10)
    )
    entry = registry.lookup(part)
    block = entry.render(ctx) if entry else None
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from netchat.rendering.blocks import Block
    from netchat.rendering.context import RenderContext

logger = logging.getLogger(__name__)

Matcher = Callable[[Any], bool]
Renderer = Callable[["RenderContext"], Optional["Block"]]


@dataclass(frozen=True)
class RendererEntry:
    """One registration: which parts it handles and how to present them."""

    key: str
    matcher: Matcher
    render: Renderer
    priority: int = 0


class RendererRegistry:
    """Priority-ordered, copy-on-write registry of renderer entries."""

    def __init__(self, entries: list[RendererEntry] | None = None):
        self._lock = threading.Lock()
        self._entries: dict[str, RendererEntry] = {}
        self._sorted: tuple[RendererEntry, ...] = ()
        for entry in entries or []:
            self.register(entry)

    def register(self, entry: RendererEntry) -> None:
        """Insert or replace the entry for ``entry.key``. Last write wins."""
        with self._lock:
            entries = dict(self._entries)
            if entry.key in entries:
                logger.debug(f"Replacing renderer '{entry.key}'")
            entries[entry.key] = entry
            self._publish(entries)

    def unregister(self, key: str) -> None:
        """Remove an entry. Unknown keys are ignored."""
        with self._lock:
            if key not in self._entries:
                return
            entries = dict(self._entries)
            del entries[key]
            self._publish(entries)

    def _publish(self, entries: dict[str, RendererEntry]) -> None:
        # sorted() is stable, so equal priorities keep insertion order
        ordered = tuple(sorted(entries.values(), key=lambda e: -e.priority))
        self._entries = entries
        self._sorted = ordered

    def lookup(self, part: Any) -> RendererEntry | None:
        """
        Find the highest-priority entry whose matcher accepts the part.

        Returns None when nothing matches. Never raises: a matcher that
        fails is logged and treated as not matching.
        """
        for entry in self._sorted:
            try:
                matched = entry.matcher(part)
            except Exception as e:
                logger.warning(f"Renderer '{entry.key}' matcher failed: {e}")
                continue
            if matched:
                return entry
        return None

    def get(self, key: str) -> RendererEntry | None:
        return self._entries.get(key)

    def registered_keys(self) -> list[str]:
        """Keys in registration order."""
        return list(self._entries.keys())

    def has_renderer(self, key: str) -> bool:
        return key in self._entries

    def entries(self) -> tuple[RendererEntry, ...]:
        """Current snapshot in lookup order."""
        return self._sorted

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
