"""Tests for the part classifier and part parsing."""

import pytest

from tests import fixtures as f
from netchat.core.types import PartKind
from netchat.parts import (
    DynamicToolPart,
    GenericPart,
    NetworkTracePart,
    ReasoningPart,
    SourcePart,
    SourceUrlPart,
    TextPart,
    ToolPart,
    classify,
    is_displayable_part,
    parse_part,
    parse_parts,
    tool_name_of,
)


class TestClassifyRaw:
    """Tests for classifying raw wire records."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (f.text("hi"), PartKind.TEXT),
            (f.reasoning("hmm"), PartKind.REASONING),
            (f.tool("weatherTool"), PartKind.TOOL),
            (f.tool("brand-new-tool"), PartKind.TOOL),
            (f.dynamic_tool(), PartKind.DYNAMIC_TOOL),
            (f.network(), PartKind.NETWORK),
            (f.source_url("https://a.example"), PartKind.SOURCE),
            ({"type": "source", "source": {"url": "https://b.example"}}, PartKind.SOURCE),
            ({"type": "step-start"}, PartKind.UNCLASSIFIED),
        ],
    )
    def test_recognized_discriminants(self, raw, expected):
        """Each discriminant maps to exactly one kind."""
        assert classify(raw) is expected

    @pytest.mark.parametrize(
        "raw",
        [{}, {"type": ""}, {"type": None}, {"type": 42}, {"text": "no type"}, "text", None, 3],
    )
    def test_missing_or_invalid_discriminant_is_malformed(self, raw):
        """Absent or non-string discriminants are malformed, never an exception."""
        assert classify(raw) is PartKind.MALFORMED

    def test_structural_payload_required(self):
        """A known discriminant without its payload field is unclassified."""
        assert classify({"type": "text"}) is PartKind.UNCLASSIFIED
        assert classify({"type": "data-network"}) is PartKind.UNCLASSIFIED
        assert classify({"type": "dynamic-tool"}) is PartKind.UNCLASSIFIED

    @pytest.mark.parametrize(
        "raw",
        [
            {"type": "text", "text": None},
            {"type": "text", "text": 5},
            {"type": "reasoning", "text": None},
            {"type": "data-network", "data": "x"},
            {"type": "data-network", "data": None},
            {"type": "dynamic-tool", "output": "x"},
        ],
    )
    def test_payload_of_wrong_shape_is_unclassified(self, raw):
        """Raw and parsed forms of the same record classify alike."""
        assert classify(raw) is PartKind.UNCLASSIFIED
        assert classify(parse_part(raw)) is classify(raw)

    def test_null_dynamic_tool_output_is_accepted(self):
        raw = {"type": "dynamic-tool", "output": None}

        assert classify(raw) is PartKind.DYNAMIC_TOOL
        assert classify(parse_part(raw)) is PartKind.DYNAMIC_TOOL

    def test_classification_is_stable(self):
        """Repeated calls give identical results."""
        raw = f.network(steps=[f.step(reason="route")])
        assert {classify(raw) for _ in range(5)} == {PartKind.NETWORK}


class TestParsePart:
    """Tests for validating raw parts into models."""

    def test_parses_each_kind_into_its_model(self):
        assert isinstance(parse_part(f.text()), TextPart)
        assert isinstance(parse_part(f.reasoning()), ReasoningPart)
        assert isinstance(parse_part(f.tool()), ToolPart)
        assert isinstance(parse_part(f.dynamic_tool()), DynamicToolPart)
        assert isinstance(parse_part(f.network()), NetworkTracePart)
        assert isinstance(parse_part(f.source_url("https://a.example")), SourceUrlPart)
        assert isinstance(parse_part({"type": "source", "url": "https://a.example"}), SourcePart)

    def test_parsed_model_classifies_like_raw(self):
        for raw in (f.text(), f.tool("x"), f.network(), f.dynamic_tool()):
            assert classify(parse_part(raw)) is classify(raw)

    def test_malformed_returns_none(self):
        assert parse_part({"no": "type"}) is None

    def test_unknown_type_kept_as_generic(self):
        part = parse_part({"type": "step-start", "extra": 1})

        assert isinstance(part, GenericPart)
        assert classify(part) is PartKind.UNCLASSIFIED
        assert part.to_wire() == {"type": "step-start", "extra": 1}

    def test_invalid_payload_downgrades_to_generic(self):
        """A text part whose text is not a string is kept but never rendered."""
        part = parse_part({"type": "text", "text": {"not": "a string"}})

        assert isinstance(part, GenericPart)
        assert classify(part) is PartKind.UNCLASSIFIED

    def test_tool_name_comes_from_discriminant(self):
        part = parse_part(f.tool("web-search"))

        assert part.tool_name == "web-search"
        assert tool_name_of(part) == "web-search"
        assert tool_name_of(f.text()) is None

    def test_wire_names_survive_round_trip(self):
        raw = f.tool("calc", input={"a": 1}, output={"b": 2}, error_text="boom", custom="kept")

        assert parse_part(raw).to_wire() == raw

    def test_parse_parts_drops_only_malformed(self):
        parts = parse_parts([f.text(), {"bad": True}, {"type": "step-start"}])

        assert [type(p) for p in parts] == [TextPart, GenericPart]


class TestDisplayable:
    """Tests for the history "displayable" predicate."""

    def test_blank_text_is_not_displayable(self):
        assert not is_displayable_part(f.text("   "))
        assert is_displayable_part(f.text("x"))

    def test_tools_network_and_replays_are_displayable(self):
        assert is_displayable_part(f.tool("anything", state="input-streaming"))
        assert is_displayable_part(f.network())
        assert is_displayable_part(f.dynamic_tool())

    def test_reasoning_and_sources_are_not_displayable(self):
        assert not is_displayable_part(f.reasoning())
        assert not is_displayable_part(f.source_url("https://a.example"))
        assert not is_displayable_part({})
