"""
Pytest fixtures for netchat tests.

Provides ready-made registries, dispatchers and conversations so tests can
focus on one behavior each. Raw wire records come from tests.fixtures.
"""

import pytest

from tests import fixtures as f
from netchat.config.settings import NetchatSettings
from netchat.rendering import RendererRegistry, create_default_registry
from netchat.runtime import StreamDispatcher
from netchat.testing import FakeHistoryFetcher


@pytest.fixture
def registry() -> RendererRegistry:
    """A fresh registry with the built-in renderers (never shared between tests)."""
    return create_default_registry()


@pytest.fixture
def empty_registry() -> RendererRegistry:
    return RendererRegistry()


@pytest.fixture
def dev_settings() -> NetchatSettings:
    return NetchatSettings(environment="development")


@pytest.fixture
def prod_settings() -> NetchatSettings:
    return NetchatSettings(environment="production")


@pytest.fixture
def dispatcher(registry, dev_settings) -> StreamDispatcher:
    return StreamDispatcher(registry, settings=dev_settings)


@pytest.fixture
def network_turn_history() -> list[dict]:
    """A stored thread where one network turn was persisted as several snapshots."""
    return [
        f.user("u1", "Weather in Madrid?"),
        f.message(
            "a1",
            parts=[
                f.reasoning("Need the weather agent"),
                f.dynamic_tool(
                    f.child_tool("weatherTool", {"city": "Madrid"}, f.weather_data()),
                    f.child_text("It's sunny in Madrid."),
                ),
            ],
        ),
        f.message("a2", parts=[f.dynamic_tool(f.child_text("partial snapshot"))]),
        f.message("a3", parts=[f.text("It's sunny in Madrid.")]),
        f.message(
            "a4",
            parts=[f.text('{"isNetwork":true,"selectionReason":"weather"}')],
        ),
        f.message(
            "a5",
            parts=[f.text("done")],
            metadata={"mode": "network", "completionResult": {"complete": True}},
        ),
        f.user("u2", "Thanks"),
    ]


@pytest.fixture
def fake_fetcher(network_turn_history) -> FakeHistoryFetcher:
    return FakeHistoryFetcher(threads={"thread-1": network_turn_history, "empty": []})
