"""Tests for RendererRegistry."""

import threading

from tests import fixtures as f
from netchat.parts import is_text_part, is_tool_part
from netchat.rendering import (
    DEFAULT_RENDERERS,
    RendererEntry,
    RendererRegistry,
    TextBlock,
)


def _entry(key, matcher=lambda part: True, priority=0):
    return RendererEntry(key=key, matcher=matcher, render=lambda ctx: TextBlock(text=key), priority=priority)


class TestLookup:
    """Tests for priority-ordered lookup."""

    def test_higher_priority_wins(self, empty_registry):
        empty_registry.register(_entry("tool", priority=5))
        empty_registry.register(_entry("text", priority=10))

        assert empty_registry.lookup(f.text()).key == "text"

    def test_registration_order_does_not_matter(self, empty_registry):
        empty_registry.register(_entry("text", priority=10))
        empty_registry.register(_entry("tool", priority=5))

        assert empty_registry.lookup(f.text()).key == "text"

    def test_ties_go_to_first_registered(self, empty_registry):
        empty_registry.register(_entry("first", priority=3))
        empty_registry.register(_entry("second", priority=3))

        assert empty_registry.lookup(f.text()).key == "first"

    def test_no_match_returns_none(self, empty_registry):
        empty_registry.register(_entry("tool", matcher=is_tool_part))

        assert empty_registry.lookup(f.text()) is None

    def test_failing_matcher_is_skipped(self, empty_registry):
        def explode(part):
            raise KeyError("boom")

        empty_registry.register(_entry("broken", matcher=explode, priority=100))
        empty_registry.register(_entry("text", matcher=is_text_part, priority=1))

        assert empty_registry.lookup(f.text()).key == "text"

    def test_empty_registry(self, empty_registry):
        assert empty_registry.lookup(f.text()) is None
        assert len(empty_registry) == 0


class TestMutation:
    """Tests for register / unregister semantics."""

    def test_reregister_replaces_entry(self, empty_registry):
        empty_registry.register(_entry("text", priority=1))
        replacement = _entry("text", priority=1)
        empty_registry.register(replacement)

        assert len(empty_registry) == 1
        assert empty_registry.get("text") is replacement

    def test_reregister_with_new_priority_reorders(self, empty_registry):
        empty_registry.register(_entry("a", priority=10))
        empty_registry.register(_entry("b", priority=5))
        empty_registry.register(_entry("b", priority=20))

        assert [e.key for e in empty_registry.entries()] == ["b", "a"]

    def test_reregister_keeps_slot(self, empty_registry):
        empty_registry.register(_entry("a"))
        empty_registry.register(_entry("b"))
        empty_registry.register(_entry("a"))

        assert empty_registry.registered_keys() == ["a", "b"]

    def test_unregister(self, empty_registry):
        empty_registry.register(_entry("a"))
        empty_registry.unregister("a")

        assert "a" not in empty_registry
        assert not empty_registry.has_renderer("a")

    def test_unregister_unknown_key_is_ignored(self, empty_registry):
        empty_registry.unregister("missing")

        assert len(empty_registry) == 0

    def test_snapshot_unchanged_by_later_writes(self, empty_registry):
        empty_registry.register(_entry("a", priority=1))
        snapshot = empty_registry.entries()
        empty_registry.register(_entry("b", priority=2))

        assert [e.key for e in snapshot] == ["a"]

    def test_concurrent_registration(self, empty_registry):
        def register_many(prefix):
            for i in range(50):
                empty_registry.register(_entry(f"{prefix}-{i}", priority=i))

        threads = [threading.Thread(target=register_many, args=(p,)) for p in "abcd"]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(empty_registry) == 200
        priorities = [e.priority for e in empty_registry.entries()]
        assert priorities == sorted(priorities, reverse=True)


class TestDefaults:
    """Tests for the built-in registry."""

    def test_default_keys_and_priorities(self, registry):
        assert {e.key: e.priority for e in registry.entries()} == {
            "tool-call": 50,
            "reasoning": 20,
            "data-network": 15,
            "text": 10,
            "dynamic-tool": 8,
            "tool": 5,
        }

    def test_each_kind_routes_to_its_renderer(self, registry):
        assert registry.lookup(f.text()).key == "text"
        assert registry.lookup(f.reasoning()).key == "reasoning"
        assert registry.lookup(f.network()).key == "data-network"
        assert registry.lookup(f.dynamic_tool()).key == "dynamic-tool"
        assert registry.lookup(f.tool("calculator")).key == "tool"

    def test_weather_tool_overrides_generic_tool(self, registry):
        assert registry.lookup(f.tool("weatherTool")).key == "tool-call"
        assert registry.lookup(f.tool("get-weather")).key == "tool-call"

    def test_unclassified_and_malformed_have_no_renderer(self, registry):
        assert registry.lookup({"type": "step-start"}) is None
        assert registry.lookup({}) is None

    def test_registries_are_independent(self, registry):
        registry.unregister("text")

        assert len(DEFAULT_RENDERERS) == 6
        assert registry.lookup(f.text()) is None
        assert RendererRegistry(list(DEFAULT_RENDERERS)).lookup(f.text()).key == "text"
