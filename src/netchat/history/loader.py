"""
Thread history loading.

Fetches a stored thread through a caller-supplied HistoryFetcher and
normalizes it for first display. "Not found" is a normal outcome
(``exists=False``, the caller decides what to do); any other failure
propagates unchanged. No retries happen here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from netchat.history.normalizer import normalize_history
from netchat.parts.models import Message

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKER = re.compile(r"\b404\b")


class ThreadNotFoundError(Exception):
    """Raised by fetchers when the requested thread does not exist."""

    def __init__(self, thread_id: str):
        super().__init__(f"Thread not found: {thread_id} (404)")
        self.thread_id = thread_id
        self.status = 404


@runtime_checkable
class HistoryFetcher(Protocol):
    """
    Source of stored conversations (persistence backend, REST client, ...).

    Implementations raise ThreadNotFoundError, or any error carrying a 404
    status, when the thread does not exist.
    """

    async def list_messages(self, thread_id: str) -> list[dict[str, Any]]:
        """Return the thread's stored messages, oldest first."""
        ...


@dataclass
class ThreadHistory:
    exists: bool
    messages: list[Message] = field(default_factory=list)


def is_not_found_error(error: BaseException) -> bool:
    """
    Whether a fetch error means "thread does not exist".

    Accepts ThreadNotFoundError, errors with ``status``/``status_code`` 404,
    and errors whose message carries 404 as a standalone number.
    """
    if isinstance(error, ThreadNotFoundError):
        return True
    for attr in ("status", "status_code"):
        if getattr(error, attr, None) == 404:
            return True
    return _NOT_FOUND_MARKER.search(str(error)) is not None


async def load_thread_history(fetcher: HistoryFetcher, thread_id: str) -> ThreadHistory:
    """
    Fetch and normalize one thread.

    Args:
        fetcher: Backend access
        thread_id: Thread to load; empty means "no thread"

    Returns:
        ThreadHistory(exists=False) when the thread is missing, otherwise the
        normalized messages (possibly empty)

    Raises:
        Whatever the fetcher raised, for failures other than "not found"
    """
    if not thread_id:
        return ThreadHistory(exists=False)

    try:
        raw_messages = await fetcher.list_messages(thread_id)
    except Exception as e:
        if is_not_found_error(e):
            logger.info(f"Thread {thread_id} not found")
            return ThreadHistory(exists=False)
        logger.error(f"Failed to load thread {thread_id}: {e}")
        raise

    if not raw_messages:
        return ThreadHistory(exists=True, messages=[])

    messages = normalize_history(raw_messages)
    logger.debug(
        f"Thread {thread_id}: loaded {len(raw_messages)} message(s), "
        f"{len(messages)} displayable"
    )
    return ThreadHistory(exists=True, messages=messages)
