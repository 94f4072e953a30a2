"""
Network trace extraction: routing reason, sources, output, weather data and
token usage.

The routing reason lives in ``steps[*].task.reason``. It is shown as
transient reasoning while a turn streams and is scrubbed from settled
history, so everything here tolerates its absence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from netchat.core.types import NETWORK_TYPE, WEATHER_TOOL_NAMES
from netchat.extraction.sources import extract_network_sources
from netchat.parts.classifier import field_value, part_type
from netchat.parts.models import SourceData


@dataclass(frozen=True)
class NetworkSummary:
    """Structured view of one network execution."""

    reasoning: str | None
    sources: list[SourceData] | None
    has_output: bool
    output: str | None


def _steps(data_or_steps: Any) -> list[Any]:
    if isinstance(data_or_steps, list):
        return data_or_steps
    if data_or_steps is None:
        return []
    steps = field_value(data_or_steps, "steps")
    return steps if isinstance(steps, list) else []


def extract_network_reason(data_or_steps: Any) -> str | None:
    """
    First non-empty ``task.reason`` across the steps.

    Args:
        data_or_steps: Network data (with ``steps``) or the step list itself

    Returns:
        The reason text, or None
    """
    for step in _steps(data_or_steps):
        task = field_value(step, "task")
        if task is None:
            continue
        reason = field_value(task, "reason")
        if isinstance(reason, str) and reason:
            return reason
    return None


def extract_network_data(data: Any) -> NetworkSummary:
    if data is None:
        return NetworkSummary(reasoning=None, sources=None, has_output=False, output=None)

    output = field_value(data, "output")
    has_output = output is not None
    return NetworkSummary(
        reasoning=extract_network_reason(data),
        sources=extract_network_sources(data),
        has_output=has_output,
        output=str(output) if has_output else None,
    )


def is_duplicate_reasoning(
    text: str,
    network_reason: str | None,
    *,
    is_streaming: bool,
    is_last_message: bool,
) -> bool:
    """Whether text repeats the network reason already shown for this turn."""
    if not is_streaming or not is_last_message:
        return False
    return network_reason is not None and text == network_reason


def is_weather_data(value: Any) -> bool:
    """Weather-shaped payload: numeric temperature, string location and conditions."""
    if not isinstance(value, dict):
        return False
    temperature = value.get("temperature")
    return (
        isinstance(temperature, (int, float))
        and not isinstance(temperature, bool)
        and isinstance(value.get("location"), str)
        and isinstance(value.get("conditions"), str)
    )


def extract_network_weather(data: Any) -> dict[str, Any] | None:
    """Weather tool result recorded in any step's ``task.toolResults``."""
    for step in _steps(data):
        task = field_value(step, "task")
        results = field_value(task, "toolResults") if task is not None else None
        if not isinstance(results, list):
            continue
        for result in results:
            if field_value(result, "toolName") not in WEATHER_TOOL_NAMES:
                continue
            payload = field_value(result, "result")
            if is_weather_data(payload):
                return payload
    return None


# Context window of the model behind the agent network
MAX_CONTEXT_TOKENS = 1_000_000


@dataclass(frozen=True)
class ConversationUsage:
    """Token usage of a conversation against the model's context window."""

    total_tokens: int
    max_tokens: int = MAX_CONTEXT_TOKENS


def _network_tokens(part: Any) -> int:
    if part_type(part) != NETWORK_TYPE:
        return 0
    data = field_value(part, "data")
    usage = field_value(data, "usage") if data is not None else None
    tokens = field_value(usage, "totalTokens") if usage is not None else None
    if isinstance(tokens, bool) or not isinstance(tokens, (int, float)) or tokens <= 0:
        return 0
    return int(tokens)


def conversation_usage(messages: Iterable[Any]) -> ConversationUsage:
    """
    Sum ``data.usage.totalTokens`` over every network trace in the conversation.

    Args:
        messages: Message models or raw message dicts

    Returns:
        ConversationUsage; parts without usage data count as zero
    """
    total = 0
    for message in messages:
        parts = field_value(message, "parts")
        if not isinstance(parts, list):
            continue
        total += sum(_network_tokens(part) for part in parts)
    return ConversationUsage(total_tokens=total)
