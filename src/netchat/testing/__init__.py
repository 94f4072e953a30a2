"""Test doubles for code built on netchat."""

from netchat.testing.fake_fetcher import FakeHistoryFetcher

__all__ = ["FakeHistoryFetcher"]
