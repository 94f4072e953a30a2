"""
Presentation-neutral render blocks.

Renderers decide *what* to show; the host UI decides *how*. Each block is a
plain dataclass the UI maps onto its own widgets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from netchat.extraction.citations import CitationMatch
from netchat.parts.models import SourceData


@dataclass(frozen=True)
class TextBlock:
    kind: Literal["text"] = field(default="text", init=False)
    text: str


@dataclass(frozen=True)
class CitedTextBlock:
    """Text split around ``[N]`` markers, plus the sources list shown below it."""

    kind: Literal["cited_text"] = field(default="cited_text", init=False)
    segments: list[str]
    citations: list[CitationMatch]
    sources: list[SourceData]


@dataclass(frozen=True)
class ReasoningBlock:
    kind: Literal["reasoning"] = field(default="reasoning", init=False)
    text: str
    is_streaming: bool


@dataclass(frozen=True)
class ToolBlock:
    kind: Literal["tool"] = field(default="tool", init=False)
    title: str
    tool_type: str
    state: str | None
    input: Any = None
    output: Any = None
    error_text: str | None = None


@dataclass(frozen=True)
class SourcesBlock:
    kind: Literal["sources"] = field(default="sources", init=False)
    sources: list[SourceData]


@dataclass(frozen=True)
class WeatherBlock:
    kind: Literal["weather"] = field(default="weather", init=False)
    data: dict[str, Any]


@dataclass(frozen=True)
class NetworkBlock:
    """Technical view of a network execution (steps, statuses, tool results)."""

    kind: Literal["network"] = field(default="network", init=False)
    data: Any
    is_streaming: bool


@dataclass(frozen=True)
class GroupBlock:
    kind: Literal["group"] = field(default="group", init=False)
    children: list["Block"]


Block = Union[
    TextBlock,
    CitedTextBlock,
    ReasoningBlock,
    ToolBlock,
    SourcesBlock,
    WeatherBlock,
    NetworkBlock,
    GroupBlock,
]
