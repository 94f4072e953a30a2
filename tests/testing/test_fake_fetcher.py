"""Tests for FakeHistoryFetcher."""

import pytest

from tests import fixtures as f
from netchat.history import ThreadNotFoundError
from netchat.testing import FakeHistoryFetcher


class TestFakeHistoryFetcher:
    @pytest.mark.asyncio
    async def test_serves_copies_of_threads(self):
        thread = [f.user("u1")]
        fetcher = FakeHistoryFetcher(threads={"t-1": thread})

        messages = await fetcher.list_messages("t-1")
        messages.clear()

        assert await fetcher.list_messages("t-1") == thread
        assert fetcher.calls == ["t-1", "t-1"]

    @pytest.mark.asyncio
    async def test_unknown_thread_raises_not_found(self):
        fetcher = FakeHistoryFetcher()

        with pytest.raises(ThreadNotFoundError) as exc_info:
            await fetcher.list_messages("missing")

        assert exc_info.value.status == 404
        assert exc_info.value.thread_id == "missing"

    @pytest.mark.asyncio
    async def test_configured_error(self):
        fetcher = FakeHistoryFetcher(threads={"t-1": []}, error=ConnectionError("offline"))

        with pytest.raises(ConnectionError):
            await fetcher.list_messages("t-1")
