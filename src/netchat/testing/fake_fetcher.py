"""Fake HistoryFetcher for unit testing history loading."""

from __future__ import annotations

from typing import Any

from netchat.history.loader import ThreadNotFoundError


class FakeHistoryFetcher:
    """
    In-memory implementation of the HistoryFetcher protocol.

    Serves canned threads, raises a configured error, and records every
    call. No mocking framework needed - just use this directly.

    Example:
        async def test_missing_thread():
            fetcher = FakeHistoryFetcher(threads={"t-1": [...]})

            history = await load_thread_history(fetcher, "t-2")

            assert history.exists is False
            assert fetcher.calls == ["t-2"]
    """

    def __init__(
        self,
        threads: dict[str, list[dict[str, Any]]] | None = None,
        error: Exception | None = None,
    ):
        self.threads: dict[str, list[dict[str, Any]]] = dict(threads or {})
        self.error = error
        self.calls: list[str] = []

    async def list_messages(self, thread_id: str) -> list[dict[str, Any]]:
        self.calls.append(thread_id)
        if self.error is not None:
            raise self.error
        if thread_id not in self.threads:
            raise ThreadNotFoundError(thread_id)
        return list(self.threads[thread_id])
