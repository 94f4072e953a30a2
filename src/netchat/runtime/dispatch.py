"""
Stream dispatch - classify and render parts as they arrive.

Live path:
    event -> LiveConversation -> classify -> registry.lookup -> renderer

Events are handled strictly in arrival order, one at a time, with no
buffering. Everything per event is synchronous; the only await is for the
next event. Cancelling the loop stops further dispatch; renders already
delivered to the sink stand.

Visibility rules that depend on the stream (reasoning only while the last
message streams, the network fallback once it settles) are pure functions of
(part, is_last_message, status). A status change therefore re-renders the
last message, and a message that stops being the last one is rendered again,
so those rules take effect immediately.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterable, Awaitable, Callable

from netchat.config.settings import NetchatSettings
from netchat.core.formatters import has_text_part
from netchat.core.types import PartKind, StreamStatus
from netchat.parts.classifier import classify, part_type
from netchat.parts.models import Message
from netchat.rendering.blocks import Block
from netchat.rendering.context import RenderContext
from netchat.rendering.registry import RendererRegistry
from netchat.runtime.conversation import LiveConversation
from netchat.runtime.events import (
    MessageStarted,
    PartAppended,
    PartUpdated,
    StatusChanged,
    StreamEvent,
)

logger = logging.getLogger(__name__)

RenderSink = Callable[["RenderedPart"], Awaitable[None] | None]


@dataclass(frozen=True)
class RenderedPart:
    """
    Output of one dispatch: which part it was and what to show.

    ``block`` is None when the part has nothing to render (any more); the
    live path reports that so a UI can clear what it showed before.
    """

    message_id: str
    part_index: int
    kind: PartKind
    block: Block | None

    @property
    def is_empty(self) -> bool:
        return self.block is None


def render_part(
    registry: RendererRegistry,
    ctx: RenderContext,
    *,
    warn_missing: bool = True,
) -> Block | None:
    """
    Render one part through the registry.

    Malformed parts are never dispatched. A part no renderer accepts renders
    nothing; the developer warning is emitted only when ``warn_missing``.
    A failing renderer is logged and renders nothing.
    """
    kind = classify(ctx.part)
    if kind is PartKind.MALFORMED:
        logger.debug(f"Skipping malformed part at index {ctx.part_index}")
        return None

    entry = registry.lookup(ctx.part)
    if entry is None:
        message = f"No renderer for part type {part_type(ctx.part)!r} ({kind.value})"
        if warn_missing:
            logger.warning(message)
        else:
            logger.debug(message)
        return None

    try:
        return entry.render(ctx)
    except Exception as e:
        logger.error(f"Renderer '{entry.key}' failed: {e}", exc_info=True)
        return None


def render_message(
    registry: RendererRegistry,
    message: Message,
    *,
    is_last_message: bool,
    status: StreamStatus | str,
    warn_missing: bool = True,
    include_empty: bool = False,
) -> list[RenderedPart]:
    """
    Render every part of a message.

    Parts with nothing to show are omitted unless ``include_empty``.

    The "message has a text part" fact is computed once here and handed to
    each renderer explicitly; the network fallback depends on it.
    """
    status = StreamStatus(status)
    parts = list(message.parts)
    has_text = has_text_part(parts)

    rendered: list[RenderedPart] = []
    for index, part in enumerate(parts):
        ctx = RenderContext(
            part=part,
            part_index=index,
            is_last_message=is_last_message,
            status=status,
            has_text_part=has_text,
            all_parts=parts,
        )
        block = render_part(registry, ctx, warn_missing=warn_missing)
        if block is not None or include_empty:
            rendered.append(
                RenderedPart(
                    message_id=message.id,
                    part_index=index,
                    kind=classify(part),
                    block=block,
                )
            )
    return rendered


def render_conversation(
    registry: RendererRegistry,
    messages: list[Message],
    *,
    status: StreamStatus | str = StreamStatus.READY,
    warn_missing: bool = True,
) -> list[RenderedPart]:
    """Render a whole conversation, e.g. a normalized history on first display."""
    rendered: list[RenderedPart] = []
    for i, message in enumerate(messages):
        rendered.extend(
            render_message(
                registry,
                message,
                is_last_message=i == len(messages) - 1,
                status=status,
                warn_missing=warn_missing,
            )
        )
    return rendered


class StreamDispatcher:
    """
    Applies live stream events to a conversation and renders the results.

    One dispatcher serves one conversation; the registry may be shared.

    Example:
        dispatcher = StreamDispatcher(create_default_registry())
        await dispatcher.run(events, sink=ui.show)
    """

    def __init__(
        self,
        registry: RendererRegistry,
        conversation: LiveConversation | None = None,
        settings: NetchatSettings | None = None,
    ):
        self.registry = registry
        self.conversation = conversation or LiveConversation()
        self.settings = settings or NetchatSettings()

    @property
    def _warn_missing(self) -> bool:
        return not self.settings.is_production

    def _render_live(self, message: Message) -> list[RenderedPart]:
        # Whole message: text depends on sibling sources and network reason
        return render_message(
            self.registry,
            message,
            is_last_message=self.conversation.is_last(message.id),
            status=self.conversation.status,
            warn_missing=self._warn_missing,
            include_empty=True,
        )

    def _render_demoted(self, previous: Message | None) -> list[RenderedPart]:
        """Re-render the former last message once a newer one took its place."""
        if previous is None or self.conversation.is_last(previous.id):
            return []
        current = self.conversation.get(previous.id)
        return self._render_live(current) if current is not None else []

    def render_last_message(self) -> list[RenderedPart]:
        last = self.conversation.last_message
        if last is None:
            return []
        return self._render_live(last)

    def dispatch(self, event: StreamEvent) -> list[RenderedPart]:
        """
        Process one event synchronously.

        Returns:
            Renders produced by this event, one entry per part of every
            affected message, each replacing what was shown for that slot.
            Part events render the part's whole message; a status change
            renders the last message. When a new message becomes the last
            one, the previous last message is rendered again as well.
        """
        match event:
            case MessageStarted(message_id=message_id, role=role, metadata=metadata):
                if not message_id:
                    logger.warning("MessageStarted without message_id - ignoring")
                    return []
                previous = self.conversation.last_message
                self.conversation.start_message(message_id, role=role, metadata=metadata)
                return self._render_demoted(previous)

            case PartAppended(message_id=message_id, part=raw, role=role):
                if not message_id:
                    logger.warning("PartAppended without message_id - ignoring")
                    return []
                previous = self.conversation.last_message
                result = self.conversation.append_part(message_id, raw, role=role)
                if result is None:
                    return []
                message, _ = result
                return self._render_demoted(previous) + self._render_live(message)

            case PartUpdated(message_id=message_id, part_index=index, part=raw):
                if not message_id:
                    logger.warning("PartUpdated without message_id - ignoring")
                    return []
                result = self.conversation.update_part(message_id, index, raw)
                if result is None:
                    return []
                message, _ = result
                return self._render_live(message)

            case StatusChanged(status=status):
                previous = self.conversation.status
                self.conversation.set_status(status)
                logger.debug(f"Stream status {previous.value} -> {self.conversation.status.value}")
                return self.render_last_message()

            case _:
                logger.debug(f"Ignoring unknown event: {event!r}")
                return []

    async def run(
        self,
        events: AsyncIterable[StreamEvent],
        sink: RenderSink,
    ) -> None:
        """
        Consume events in order until the stream ends.

        Each render is handed to ``sink`` (sync or async) before the next
        event is read. A failing event is logged and skipped; cancellation
        propagates to the caller.
        """
        try:
            async for event in events:
                try:
                    rendered = self.dispatch(event)
                except Exception as e:
                    logger.error(f"Error dispatching {event.type}: {e}", exc_info=True)
                    continue

                for item in rendered:
                    result = sink(item)
                    if asyncio.iscoroutine(result):
                        await result
        except asyncio.CancelledError:
            logger.debug("Stream dispatch cancelled")
            raise

        logger.debug("Stream dispatch finished")
