"""
Renderer registry, render context and the built-in renderers.

Example:
    from netchat.rendering import RenderContext, create_default_registry

    registry = create_default_registry()
    entry = registry.lookup(part)
    if entry:
        block = entry.render(RenderContext(part=part, all_parts=message.parts))
"""

from .blocks import (
    Block,
    CitedTextBlock,
    GroupBlock,
    NetworkBlock,
    ReasoningBlock,
    SourcesBlock,
    TextBlock,
    ToolBlock,
    WeatherBlock,
)
from .context import RenderContext, reasoning_visible
from .registry import Matcher, Renderer, RendererEntry, RendererRegistry
from .renderers import (
    DEFAULT_RENDERERS,
    create_default_registry,
    is_weather_tool_part,
    should_synthesize_fallback,
)

__all__ = [
    # Blocks
    "Block",
    "CitedTextBlock",
    "GroupBlock",
    "NetworkBlock",
    "ReasoningBlock",
    "SourcesBlock",
    "TextBlock",
    "ToolBlock",
    "WeatherBlock",
    # Registry
    "Matcher",
    "Renderer",
    "RendererEntry",
    "RendererRegistry",
    "RenderContext",
    "reasoning_visible",
    # Defaults
    "DEFAULT_RENDERERS",
    "create_default_registry",
    "is_weather_tool_part",
    "should_synthesize_fallback",
]
