"""
History utilities for turning a stored thread into displayable messages.

The main entry point is `load_thread_history()`, which fetches a thread via a
HistoryFetcher and runs `normalize_history()` over it. The normalizer can also
be used on its own for already-fetched data.

Example:
    from netchat.history import load_thread_history

    history = await load_thread_history(fetcher, thread_id)
    if not history.exists:
        redirect_home()
    else:
        show(history.messages)
"""

from .loader import (
    HistoryFetcher,
    ThreadHistory,
    ThreadNotFoundError,
    is_not_found_error,
    load_thread_history,
)
from .normalizer import (
    collapse_network_turns,
    drop_non_displayable,
    is_completion_check,
    is_displayable_message,
    is_network_message,
    normalize_history,
    strip_ephemeral_parts,
    strip_network_reasons,
)
from .parser import parse_message, parse_messages

__all__ = [
    "HistoryFetcher",
    "ThreadHistory",
    "ThreadNotFoundError",
    "collapse_network_turns",
    "drop_non_displayable",
    "is_completion_check",
    "is_displayable_message",
    "is_network_message",
    "is_not_found_error",
    "load_thread_history",
    "normalize_history",
    "parse_message",
    "parse_messages",
    "strip_ephemeral_parts",
    "strip_network_reasons",
]
