"""
Message part models and the structural classifier.

Example:
    from netchat.parts import classify, parse_part

    part = parse_part({"type": "tool-weatherTool", "state": "output-available"})
    classify(part)  # PartKind.TOOL
"""

from .classifier import (
    classify,
    field_value,
    is_displayable_part,
    is_dynamic_tool_part,
    is_network_part,
    is_reasoning_part,
    is_source_part,
    is_text_part,
    is_tool_part,
    parse_part,
    parse_parts,
    part_type,
    tool_name_of,
)
from .models import (
    ChildMessage,
    ChildTextMessage,
    ChildToolMessage,
    DynamicToolOutput,
    DynamicToolPart,
    GenericPart,
    Message,
    MessageMetadata,
    MessagePart,
    NetworkData,
    NetworkStep,
    NetworkTracePart,
    Part,
    ReasoningPart,
    SourceData,
    SourcePart,
    SourceUrlPart,
    StepTask,
    TextPart,
    ToolPart,
    ToolResult,
)

__all__ = [
    # Classifier
    "classify",
    "field_value",
    "is_displayable_part",
    "is_dynamic_tool_part",
    "is_network_part",
    "is_reasoning_part",
    "is_source_part",
    "is_text_part",
    "is_tool_part",
    "parse_part",
    "parse_parts",
    "part_type",
    "tool_name_of",
    # Models
    "ChildMessage",
    "ChildTextMessage",
    "ChildToolMessage",
    "DynamicToolOutput",
    "DynamicToolPart",
    "GenericPart",
    "Message",
    "MessageMetadata",
    "MessagePart",
    "NetworkData",
    "NetworkStep",
    "NetworkTracePart",
    "Part",
    "ReasoningPart",
    "SourceData",
    "SourcePart",
    "SourceUrlPart",
    "StepTask",
    "TextPart",
    "ToolPart",
    "ToolResult",
]
