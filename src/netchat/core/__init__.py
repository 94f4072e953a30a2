"""
Core enumerations and wire constants.

Pure message helpers live in ``netchat.core.formatters``; they are not
re-exported here because they depend on ``netchat.parts``, which itself
depends on this package.
"""

from netchat.core.types import (
    NETWORK_MESSAGE_MARKER,
    NetworkStatus,
    PartKind,
    StreamStatus,
    ToolState,
)

__all__ = [
    "NETWORK_MESSAGE_MARKER",
    "NetworkStatus",
    "PartKind",
    "StreamStatus",
    "ToolState",
]
