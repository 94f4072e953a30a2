"""
netchat - classify, render and normalize agent-network chat message parts.

Parts Layer:
    parse_part / classify: Wire records to typed parts and structural kinds
    Message: One conversation message with parsed parts

Rendering Layer:
    RendererRegistry: Priority-ordered part -> renderer lookup
    create_default_registry: Registry with the built-in renderers
    RenderContext: Explicit inputs for every renderer

History Layer:
    normalize_history: Make a stored thread look like the live stream
    load_thread_history: Fetch + normalize, with "not found" as a result

Runtime Layer:
    StreamDispatcher: Render parts of a live conversation as they arrive

Example (history path):
    from netchat import create_default_registry, load_thread_history, render_conversation

    history = await load_thread_history(fetcher, thread_id)
    if history.exists:
        blocks = render_conversation(create_default_registry(), history.messages)

Example (live path):
    from netchat import StreamDispatcher, create_default_registry

    dispatcher = StreamDispatcher(create_default_registry())
    await dispatcher.run(events, sink=ui.show)
"""

# Parts layer
from .core.types import PartKind, StreamStatus
from .parts import Message, classify, parse_part

# Extraction
from .extraction import (
    conversation_usage,
    extract_network_reason,
    extract_sources,
    parse_citations,
)

# Rendering layer
from .rendering import (
    RenderContext,
    RendererEntry,
    RendererRegistry,
    create_default_registry,
)

# History layer
from .history import (
    HistoryFetcher,
    ThreadHistory,
    ThreadNotFoundError,
    load_thread_history,
    normalize_history,
)

# Runtime layer
from .runtime import (
    LiveConversation,
    RenderedPart,
    StreamDispatcher,
    render_conversation,
    render_message,
)

# Configuration
from .config import NetchatSettings, load_renderer_config

__all__ = [
    # Parts
    "Message",
    "PartKind",
    "StreamStatus",
    "classify",
    "parse_part",
    # Extraction
    "conversation_usage",
    "extract_network_reason",
    "extract_sources",
    "parse_citations",
    # Rendering
    "RenderContext",
    "RendererEntry",
    "RendererRegistry",
    "create_default_registry",
    # History
    "HistoryFetcher",
    "ThreadHistory",
    "ThreadNotFoundError",
    "load_thread_history",
    "normalize_history",
    # Runtime
    "LiveConversation",
    "RenderedPart",
    "StreamDispatcher",
    "render_conversation",
    "render_message",
    # Configuration
    "NetchatSettings",
    "load_renderer_config",
]

__version__ = "0.1.0"
