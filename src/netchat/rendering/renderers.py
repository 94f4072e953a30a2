"""
Default renderers and their registry entries.

Priorities (higher is checked first):
    weather (tool-call)   50   overrides the generic tool renderer
    reasoning             20
    data-network          15
    text                  10
    dynamic-tool           8
    tool                   5   any ``tool-*`` part
"""

from __future__ import annotations

import logging
from typing import Any

from netchat.core.types import (
    WEATHER_TOOL_NAMES,
    WEB_SEARCH_TOOL,
    StreamStatus,
    ToolState,
)
from netchat.extraction.citations import parse_citations
from netchat.extraction.network import (
    extract_network_data,
    extract_network_reason,
    extract_network_weather,
    is_duplicate_reasoning,
    is_weather_data,
)
from netchat.extraction.sources import extract_part_sources, normalize_source
from netchat.parts.classifier import (
    field_value,
    is_dynamic_tool_part,
    is_network_part,
    is_reasoning_part,
    is_text_part,
    is_tool_part,
    part_type,
    tool_name_of,
)
from netchat.rendering.blocks import (
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
from netchat.rendering.context import RenderContext, reasoning_visible
from netchat.rendering.registry import RendererEntry, RendererRegistry

logger = logging.getLogger(__name__)


# --- Text ---


def _sibling_network_reason(all_parts: list[Any]) -> str | None:
    for part in all_parts:
        if is_network_part(part):
            return extract_network_reason(field_value(part, "data"))
    return None


def render_text(ctx: RenderContext) -> Block | None:
    """Plain text, or text with inline citations when the message has sources."""
    text = field_value(ctx.part, "text", "")
    if not isinstance(text, str) or text.strip() == "":
        return None

    # The network renderer already shows this reason while the turn streams
    network_reason = _sibling_network_reason(ctx.all_parts)
    if is_duplicate_reasoning(
        text,
        network_reason,
        is_streaming=ctx.is_streaming,
        is_last_message=ctx.is_last_message,
    ):
        return None

    sources = extract_part_sources(ctx.all_parts)
    parsed = parse_citations(text, sources)
    if parsed.has_citations and sources:
        return CitedTextBlock(
            segments=parsed.segments,
            citations=parsed.citations,
            sources=sources,
        )
    return TextBlock(text=text)


# --- Reasoning ---


def render_reasoning(ctx: RenderContext) -> Block | None:
    if not reasoning_visible(is_last_message=ctx.is_last_message, status=ctx.status):
        return None
    text = field_value(ctx.part, "text", "")
    if not text:
        return None
    return ReasoningBlock(text=text, is_streaming=True)


# --- Network ---


def should_synthesize_fallback(ctx: RenderContext, has_output: bool) -> bool:
    """
    Whether a network part must carry the turn's final answer itself.

    Applies when the message has no text part at all, the stream has
    settled, this is the last message and the network produced output.
    """
    return (
        not ctx.has_text_part
        and ctx.status == StreamStatus.READY
        and ctx.is_last_message
        and has_output
    )


def render_network(ctx: RenderContext) -> Block | None:
    """
    Reason, weather card, execution trace and sources, in that order.

    In the fallback case the network output text is appended last and the
    reasoning is marked settled.
    """
    data = field_value(ctx.part, "data")
    summary = extract_network_data(data)
    weather = extract_network_weather(data)
    fallback = should_synthesize_fallback(ctx, summary.has_output)
    is_streaming = False if fallback else ctx.is_streaming

    children: list[Block] = []
    if summary.reasoning:
        children.append(ReasoningBlock(text=summary.reasoning, is_streaming=is_streaming))
    if weather is not None:
        children.append(WeatherBlock(data=weather))
    children.append(NetworkBlock(data=data, is_streaming=is_streaming))
    if summary.sources:
        children.append(SourcesBlock(sources=summary.sources))
    if fallback and summary.output:
        children.append(TextBlock(text=summary.output))

    return GroupBlock(children=children)


# --- Tools ---


def _sources_block(output: Any) -> SourcesBlock | None:
    raw = field_value(output, "sources")
    if not isinstance(raw, list):
        return None
    sources = [s for s in (normalize_source(item) for item in raw) if s is not None]
    return SourcesBlock(sources=sources) if sources else None


def render_tool(ctx: RenderContext) -> Block | None:
    """
    Generic tool view.

    Web-search output is shown as its sources only; its text carries
    ``[N]`` markers meant for the agent, and the agent's answer follows.
    """
    part = ctx.part
    tool_type = part_type(part) or ""
    output = field_value(part, "output")

    if tool_name_of(part) == WEB_SEARCH_TOOL and output:
        return _sources_block(output)

    return ToolBlock(
        title=tool_name_of(part) or tool_type,
        tool_type=tool_type,
        state=field_value(part, "state"),
        input=field_value(part, "input"),
        output=output,
        error_text=field_value(part, "errorText"),
    )


def is_weather_tool_part(part: Any) -> bool:
    """Tool parts from the weather tool (``tool-<name>`` or a legacy name field)."""
    if not is_tool_part(part):
        return False
    names = (
        tool_name_of(part),
        field_value(part, "toolName"),
        field_value(part, "name"),
    )
    return any(name in WEATHER_TOOL_NAMES for name in names)


def render_weather(ctx: RenderContext) -> Block | None:
    # Support both the legacy 'result' and the mapped 'output' property
    output = field_value(ctx.part, "output") or field_value(ctx.part, "result")
    if not is_weather_data(output):
        return None
    return WeatherBlock(data=output)


# --- Dynamic tool replay ---


def _render_child(child: Any) -> Block | None:
    child_type = field_value(child, "type")
    if child_type == "text":
        content = field_value(child, "content")
        return TextBlock(text=content) if content else None
    if child_type != "tool":
        return None

    tool_name = field_value(child, "toolName")
    tool_output = field_value(child, "toolOutput")

    if tool_name == WEB_SEARCH_TOOL and tool_output:
        return _sources_block(tool_output)
    if tool_name in WEATHER_TOOL_NAMES and is_weather_data(tool_output):
        return WeatherBlock(data=tool_output)

    return ToolBlock(
        title=tool_name or "Tool",
        tool_type=f"tool-{tool_name}",
        state=ToolState.OUTPUT_AVAILABLE.value,
        input=field_value(child, "args"),
        output=tool_output,
    )


def render_dynamic_tool(ctx: RenderContext) -> Block | None:
    """Replay of a nested sub-conversation: one block per displayable child."""
    output = field_value(ctx.part, "output")
    children = field_value(output, "childMessages") if output is not None else None
    if not isinstance(children, list):
        return GroupBlock(children=[])

    blocks: list[Block] = []
    for child in children:
        block = _render_child(child)
        if block is not None:
            blocks.append(block)
    return GroupBlock(children=blocks)


# --- Registration ---

text_renderer = RendererEntry(key="text", matcher=is_text_part, render=render_text, priority=10)
reasoning_renderer = RendererEntry(
    key="reasoning", matcher=is_reasoning_part, render=render_reasoning, priority=20
)
network_renderer = RendererEntry(
    key="data-network", matcher=is_network_part, render=render_network, priority=15
)
tool_renderer = RendererEntry(key="tool", matcher=is_tool_part, render=render_tool, priority=5)
dynamic_tool_renderer = RendererEntry(
    key="dynamic-tool", matcher=is_dynamic_tool_part, render=render_dynamic_tool, priority=8
)
weather_renderer = RendererEntry(
    key="tool-call", matcher=is_weather_tool_part, render=render_weather, priority=50
)

DEFAULT_RENDERERS: tuple[RendererEntry, ...] = (
    text_renderer,
    reasoning_renderer,
    network_renderer,
    tool_renderer,
    dynamic_tool_renderer,
    weather_renderer,
)


def create_default_registry() -> RendererRegistry:
    """A fresh registry holding the built-in renderers."""
    registry = RendererRegistry(list(DEFAULT_RENDERERS))
    logger.debug(f"Default registry created with {len(registry)} renderers")
    return registry
