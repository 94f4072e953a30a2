"""
Part classifier - assigns a message part to exactly one structural kind.

Classification is purely structural (discriminant plus required payload
field). Choosing between several renderers that could handle the same part
is the registry's job, not the classifier's.

Tool parts are recognized by the ``tool-`` prefix so new tools need no
classifier change.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from netchat.core.types import (
    DYNAMIC_TOOL_TYPE,
    NETWORK_TYPE,
    REASONING_TYPE,
    SOURCE_TYPE,
    SOURCE_URL_TYPE,
    TEXT_TYPE,
    TOOL_TYPE_PREFIX,
    PartKind,
)
from netchat.parts.models import (
    DynamicToolPart,
    GenericPart,
    NetworkTracePart,
    Part,
    ReasoningPart,
    SourcePart,
    SourceUrlPart,
    TextPart,
    ToolPart,
)

logger = logging.getLogger(__name__)

_MODEL_KINDS: dict[type[BaseModel], PartKind] = {
    TextPart: PartKind.TEXT,
    ReasoningPart: PartKind.REASONING,
    ToolPart: PartKind.TOOL,
    DynamicToolPart: PartKind.DYNAMIC_TOOL,
    NetworkTracePart: PartKind.NETWORK,
    SourceUrlPart: PartKind.SOURCE,
    SourcePart: PartKind.SOURCE,
    GenericPart: PartKind.UNCLASSIFIED,
}


def field_value(part: Any, wire_name: str, default: Any = None) -> Any:
    """
    Read a field from a raw dict or a wire model by its wire name.

    Works for declared fields (matched by name or alias) and for extra
    fields the model kept from the backend.
    """
    if isinstance(part, Mapping):
        return part.get(wire_name, default)
    if isinstance(part, BaseModel):
        extra = part.model_extra or {}
        if wire_name in extra:
            return extra[wire_name]
        for name, info in type(part).model_fields.items():
            if name == wire_name or info.alias == wire_name:
                value = getattr(part, name)
                return default if value is None else value
    return default


def part_type(part: Any) -> str | None:
    """Return the part's discriminant, or None if it has no usable one."""
    value = field_value(part, "type")
    if isinstance(value, str) and value:
        return value
    return None


def _has_field(part: Any, wire_name: str, types: tuple[type, ...]) -> bool:
    """Whether the payload field is present and of a shape the part model accepts."""
    if isinstance(part, Mapping):
        return wire_name in part and isinstance(part[wire_name], types)
    value = field_value(part, wire_name)
    return value is not None and isinstance(value, types)


_TEXT_PAYLOAD = (str,)
_OBJECT_PAYLOAD = (Mapping, BaseModel)
# DynamicToolPart treats a null output as empty
_OPTIONAL_OBJECT_PAYLOAD = (Mapping, BaseModel, type(None))


def _classify_raw(part: Any) -> PartKind:
    discriminant = part_type(part)
    if discriminant is None:
        return PartKind.MALFORMED

    if discriminant == TEXT_TYPE:
        return PartKind.TEXT if _has_field(part, "text", _TEXT_PAYLOAD) else PartKind.UNCLASSIFIED
    if discriminant == REASONING_TYPE:
        return (
            PartKind.REASONING
            if _has_field(part, "text", _TEXT_PAYLOAD)
            else PartKind.UNCLASSIFIED
        )
    if discriminant == NETWORK_TYPE:
        return (
            PartKind.NETWORK
            if _has_field(part, "data", _OBJECT_PAYLOAD)
            else PartKind.UNCLASSIFIED
        )
    if discriminant == DYNAMIC_TOOL_TYPE:
        return (
            PartKind.DYNAMIC_TOOL
            if _has_field(part, "output", _OPTIONAL_OBJECT_PAYLOAD)
            else PartKind.UNCLASSIFIED
        )
    if discriminant in (SOURCE_URL_TYPE, SOURCE_TYPE):
        return PartKind.SOURCE
    if discriminant.startswith(TOOL_TYPE_PREFIX):
        return PartKind.TOOL
    return PartKind.UNCLASSIFIED


def classify(part: Any) -> PartKind:
    """
    Classify a part-shaped record. Total: never raises.

    Args:
        part: A raw dict from the wire or an already-parsed part model.

    Returns:
        The structural kind. MALFORMED when the discriminant is missing or
        not a non-empty string, UNCLASSIFIED when nothing matches.
    """
    if isinstance(part, BaseModel):
        kind = _MODEL_KINDS.get(type(part))
        if kind is not None:
            return kind
    return _classify_raw(part)


def is_text_part(part: Any) -> bool:
    return classify(part) is PartKind.TEXT


def is_reasoning_part(part: Any) -> bool:
    return classify(part) is PartKind.REASONING


def is_tool_part(part: Any) -> bool:
    return classify(part) is PartKind.TOOL


def is_dynamic_tool_part(part: Any) -> bool:
    return classify(part) is PartKind.DYNAMIC_TOOL


def is_network_part(part: Any) -> bool:
    return classify(part) is PartKind.NETWORK


def is_source_part(part: Any) -> bool:
    return classify(part) is PartKind.SOURCE


def tool_name_of(part: Any) -> str | None:
    """Tool name encoded in a tool part's discriminant (``tool-<name>``)."""
    discriminant = part_type(part)
    if discriminant and discriminant.startswith(TOOL_TYPE_PREFIX):
        return discriminant[len(TOOL_TYPE_PREFIX) :]
    return None


def is_displayable_part(part: Any) -> bool:
    """
    Whether a part counts as displayable content in settled history.

    Non-empty text, any ``tool-`` part, network traces and dynamic tool
    replays. Reasoning and sources alone never make a message displayable.
    """
    discriminant = part_type(part)
    if discriminant is None:
        return False
    if discriminant == TEXT_TYPE:
        text = field_value(part, "text")
        return isinstance(text, str) and text.strip() != ""
    return (
        discriminant.startswith(TOOL_TYPE_PREFIX)
        or discriminant == NETWORK_TYPE
        or discriminant == DYNAMIC_TOOL_TYPE
    )


_KIND_MODELS: dict[PartKind, Any] = {
    PartKind.TEXT: TextPart,
    PartKind.REASONING: ReasoningPart,
    PartKind.TOOL: ToolPart,
    PartKind.DYNAMIC_TOOL: DynamicToolPart,
    PartKind.NETWORK: NetworkTracePart,
}


def parse_part(raw: Any) -> Part | None:
    """
    Validate a raw part into its wire model.

    Returns None for malformed records. Records whose payload fails
    validation are kept as GenericPart so they stay in the message without
    ever being dispatched to a renderer.
    """
    if isinstance(raw, BaseModel):
        return raw  # type: ignore[return-value]

    kind = _classify_raw(raw)
    if kind is PartKind.MALFORMED:
        logger.debug(f"Dropping malformed part: {str(raw)[:100]}")
        return None

    if kind is PartKind.SOURCE:
        model: Any = SourceUrlPart if raw.get("type") == SOURCE_URL_TYPE else SourcePart
    else:
        model = _KIND_MODELS.get(kind, GenericPart)

    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.debug(
            f"Part of type {raw.get('type')!r} failed validation, keeping as generic: "
            f"{e.error_count()} error(s)"
        )
        return GenericPart.model_validate(raw)


def parse_parts(raw_parts: Iterable[Any]) -> list[Part]:
    """Parse a sequence of raw parts, dropping malformed ones."""
    parts: list[Part] = []
    for raw in raw_parts:
        part = parse_part(raw)
        if part is not None:
            parts.append(part)
    return parts
