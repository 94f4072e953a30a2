"""
Wire models for message parts and messages.

Parts arrive from the agent backend as JSON objects discriminated by their
``type`` field. These models validate them at runtime (Pydantic) while
keeping the backend's camelCase field names for lossless round trips:

    raw dict  ->  parse_part()  ->  TextPart | ToolPart | NetworkTracePart | ...

Unknown fields are always allowed; the backend adds fields over time and the
history pipeline must hand them back untouched.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from netchat.core.types import TOOL_TYPE_PREFIX


class WireModel(BaseModel):
    """Base for all wire models: extra fields kept, aliases accepted both ways."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump back to the backend's JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SourceData(WireModel):
    """A citation target."""

    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")


class TextPart(WireModel):
    type: Literal["text"] = "text"
    text: str


class ReasoningPart(WireModel):
    """Transient model thinking; only meaningful while its message streams."""

    type: Literal["reasoning"] = "reasoning"
    text: str


class ToolPart(WireModel):
    """One tool invocation. The discriminant is ``tool-<toolName>``."""

    type: str
    tool_call_id: Optional[str] = Field(default=None, alias="toolCallId")
    state: Optional[str] = None
    input: Any = None
    output: Any = None
    error_text: Optional[str] = Field(default=None, alias="errorText")

    @field_validator("type")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value.startswith(TOOL_TYPE_PREFIX):
            raise ValueError(f"tool part type must start with {TOOL_TYPE_PREFIX!r}")
        return value

    @property
    def tool_name(self) -> str:
        return self.type[len(TOOL_TYPE_PREFIX) :]


class ChildToolMessage(WireModel):
    type: Literal["tool"] = "tool"
    tool_call_id: Optional[str] = Field(default=None, alias="toolCallId")
    tool_name: Optional[str] = Field(default=None, alias="toolName")
    args: Optional[dict[str, Any]] = None
    tool_output: Any = Field(default=None, alias="toolOutput")


class ChildTextMessage(WireModel):
    type: Literal["text"] = "text"
    content: Optional[str] = None


ChildMessage = Union[ChildToolMessage, ChildTextMessage]


class DynamicToolOutput(WireModel):
    child_messages: list[ChildMessage] = Field(
        default_factory=list, alias="childMessages"
    )
    result: Optional[str] = None

    @field_validator("child_messages", mode="before")
    @classmethod
    def _drop_unknown_children(cls, value: Any) -> Any:
        # Children of other types carry nothing displayable
        if value is None:
            return []
        if isinstance(value, list):
            return [
                child
                for child in value
                if not isinstance(child, dict) or child.get("type") in ("tool", "text")
            ]
        return value


class DynamicToolPart(WireModel):
    """Collapsed replay of a nested agent sub-conversation, rebuilt from storage."""

    type: Literal["dynamic-tool"] = "dynamic-tool"
    tool_call_id: Optional[str] = Field(default=None, alias="toolCallId")
    tool_name: Optional[str] = Field(default=None, alias="toolName")
    state: Optional[str] = None
    input: Any = None
    output: DynamicToolOutput = Field(default_factory=DynamicToolOutput)

    @field_validator("output", mode="before")
    @classmethod
    def _none_output(cls, value: Any) -> Any:
        return {} if value is None else value


class ToolResult(WireModel):
    tool_name: Optional[str] = Field(default=None, alias="toolName")
    result: Any = None


class StepTask(WireModel):
    id: Optional[str] = None
    type: Optional[str] = None
    reason: Optional[str] = None
    tool_results: Optional[list[ToolResult]] = Field(default=None, alias="toolResults")


class NetworkStep(WireModel):
    name: Optional[str] = None
    status: Optional[str] = None
    task: Optional[StepTask] = None
    input: Any = None
    output: Any = None


class NetworkData(WireModel):
    name: Optional[str] = None
    status: Optional[str] = None
    steps: list[NetworkStep] = Field(default_factory=list)
    output: Any = None

    @field_validator("steps", mode="before")
    @classmethod
    def _none_steps(cls, value: Any) -> Any:
        return [] if value is None else value


class NetworkTracePart(WireModel):
    """Structured record of an agent-routing decision and its sub-steps."""

    type: Literal["data-network"] = "data-network"
    data: NetworkData


class SourceUrlPart(WireModel):
    """Standalone source as sent when the backend streams sources."""

    type: Literal["source-url"] = "source-url"
    url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    source_id: Optional[str] = Field(default=None, alias="sourceId")


class SourcePart(WireModel):
    """Legacy source part: either a nested ``source`` object or flat fields."""

    type: Literal["source"] = "source"
    source: Optional[dict[str, Any]] = None
    url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")


class GenericPart(WireModel):
    """Any part with a valid discriminant the core does not interpret."""

    type: str


MessagePart = Union[
    TextPart,
    ReasoningPart,
    ToolPart,
    DynamicToolPart,
    NetworkTracePart,
    SourceUrlPart,
    SourcePart,
]

Part = Union[MessagePart, GenericPart]


class MessageMetadata(WireModel):
    mode: Optional[str] = None
    completion_result: Any = Field(default=None, alias="completionResult")


class Message(WireModel):
    """
    One conversation message.

    ``parts`` accepts raw dicts; each is routed through the classifier and
    validated into its part model. Malformed records are dropped.
    """

    id: str
    role: Literal["user", "assistant", "system"]
    parts: list[Any] = Field(default_factory=list)
    metadata: Optional[MessageMetadata] = None

    @field_validator("parts", mode="before")
    @classmethod
    def _parse_parts(cls, value: Any) -> Any:
        from netchat.parts.classifier import parse_parts

        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError(f"parts must be a list, got {type(value).__name__}")
        return parse_parts(value)

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        data["parts"] = [part.to_wire() for part in self.parts]
        return data
