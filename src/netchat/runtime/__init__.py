"""
Runtime layer for live conversations.

Components:
- LiveConversation: Append-only message state plus stream status
- StreamDispatcher: Applies stream events and renders affected parts
- render_message / render_conversation: One-shot rendering helpers
"""

from .conversation import LiveConversation
from .dispatch import (
    RenderedPart,
    RenderSink,
    StreamDispatcher,
    render_conversation,
    render_message,
    render_part,
)
from .events import (
    MessageStarted,
    PartAppended,
    PartUpdated,
    StatusChanged,
    StreamEvent,
)

__all__ = [
    "LiveConversation",
    "MessageStarted",
    "PartAppended",
    "PartUpdated",
    "RenderSink",
    "RenderedPart",
    "StatusChanged",
    "StreamDispatcher",
    "StreamEvent",
    "render_conversation",
    "render_message",
    "render_part",
]
