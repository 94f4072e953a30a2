"""
Core enumerations shared by the classifier, renderers and dispatch loop.

Values are the exact strings the agent backend emits, so they can be compared
directly against raw wire records.
"""

from __future__ import annotations

from enum import Enum


class PartKind(str, Enum):
    """Structural kind assigned to a message part by the classifier."""

    TEXT = "text"
    REASONING = "reasoning"
    TOOL = "tool"
    DYNAMIC_TOOL = "dynamic-tool"
    NETWORK = "network"
    SOURCE = "source"
    UNCLASSIFIED = "unclassified"
    MALFORMED = "malformed"


class StreamStatus(str, Enum):
    """Status of the conversation's live stream."""

    READY = "ready"
    STREAMING = "streaming"
    SUBMITTED = "submitted"
    ERROR = "error"


class ToolState(str, Enum):
    """Lifecycle state of a single tool invocation."""

    INPUT_STREAMING = "input-streaming"
    INPUT_AVAILABLE = "input-available"
    OUTPUT_AVAILABLE = "output-available"
    OUTPUT_ERROR = "output-error"


class NetworkStatus(str, Enum):
    """Status of an agent-network execution or one of its steps."""

    RUNNING = "running"
    FINISHED = "finished"
    SUCCESS = "success"
    FAILED = "failed"
    WAITING = "waiting"
    SUSPENDED = "suspended"
    PAUSED = "paused"


# Wire discriminants
TEXT_TYPE = "text"
REASONING_TYPE = "reasoning"
TOOL_TYPE_PREFIX = "tool-"
DYNAMIC_TOOL_TYPE = "dynamic-tool"
NETWORK_TYPE = "data-network"
SOURCE_URL_TYPE = "source-url"
SOURCE_TYPE = "source"

# Serialized network-execution payloads stored as plain text carry this marker
NETWORK_MESSAGE_MARKER = '"isNetwork":true'

WEB_SEARCH_TOOL = "web-search"
WEATHER_TOOL_NAMES = ("get-weather", "weatherTool")
