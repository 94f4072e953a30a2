"""
Source extraction.

Sources reach a message in several shapes:
- standalone ``source-url`` parts (sent when the backend streams sources)
- legacy ``source`` parts, nested (``{"source": {...}}``) or flat
- ``sources`` lists inside tool outputs (the web-search tool)
- the web-search step of a network trace
- web-search children of a dynamic tool replay

Every function here is total: odd or missing data yields None, never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from pydantic import BaseModel

from netchat.core.types import SOURCE_TYPE, SOURCE_URL_TYPE, WEB_SEARCH_TOOL, PartKind
from netchat.parts.classifier import classify, field_value, part_type
from netchat.parts.models import SourceData

logger = logging.getLogger(__name__)


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return value
    return None


def normalize_source(value: Any) -> SourceData | None:
    """Normalize one source-shaped record; None if it has no usable url."""
    data = _as_mapping(value)
    if data is None:
        return None
    url = data.get("url")
    if not isinstance(url, str) or not url:
        return None
    return SourceData(
        url=url,
        title=_optional_text(data.get("title")),
        description=_optional_text(data.get("description")),
        lastUpdated=_optional_text(data.get("lastUpdated")),
    )


def _optional_text(value: Any) -> str | None:
    # Non-string metadata is dropped
    return value if isinstance(value, str) and value else None


def _source_list(value: Any) -> list[SourceData]:
    data = _as_mapping(value)
    if data is None:
        return []
    raw = data.get("sources")
    if not isinstance(raw, list):
        return []
    return [s for s in (normalize_source(item) for item in raw) if s is not None]


def dedupe_sources(sources: Iterable[SourceData]) -> list[SourceData]:
    """Drop repeated urls, keeping the first occurrence in order."""
    seen: set[str] = set()
    unique: list[SourceData] = []
    for source in sources:
        if source.url in seen:
            continue
        seen.add(source.url)
        unique.append(source)
    return unique


def _standalone_source(part: Any) -> SourceData | None:
    discriminant = part_type(part)
    if discriminant == SOURCE_URL_TYPE:
        return normalize_source(part)
    if discriminant == SOURCE_TYPE:
        nested = field_value(part, "source")
        return normalize_source(nested if nested is not None else part)
    return None


def extract_part_sources(parts: Iterable[Any]) -> list[SourceData] | None:
    """
    Sources from standalone source parts only.

    Returns:
        Deduplicated sources, or None when the message has none
    """
    found = [s for s in (_standalone_source(p) for p in parts) if s is not None]
    unique = dedupe_sources(found)
    return unique or None


def extract_network_sources(data: Any) -> list[SourceData] | None:
    """Sources of the first web-search step that produced output."""
    steps = field_value(data, "steps") if data is not None else None
    if not isinstance(steps, list):
        return None
    for step in steps:
        if field_value(step, "name") == WEB_SEARCH_TOOL and field_value(step, "output"):
            sources = _source_list(field_value(step, "output"))
            return sources or None
    return None


def extract_child_sources(output: Any) -> list[SourceData]:
    """Sources from the web-search children of a dynamic tool replay."""
    children = field_value(output, "childMessages") if output is not None else None
    if not isinstance(children, list):
        return []
    sources: list[SourceData] = []
    for child in children:
        if field_value(child, "type") != "tool":
            continue
        if field_value(child, "toolName") != WEB_SEARCH_TOOL:
            continue
        sources.extend(_source_list(field_value(child, "toolOutput")))
    return sources


def extract_sources(parts: Iterable[Any]) -> list[SourceData] | None:
    """
    Collect every source a message carries, deduplicated by url.

    Args:
        parts: All parts of one message (raw dicts or models)

    Returns:
        Sources in first-seen order, or None when zero sources were found
        (so callers can tell "not applicable" from an empty result)
    """
    found: list[SourceData] = []
    for part in parts:
        kind = classify(part)
        if kind is PartKind.SOURCE:
            source = _standalone_source(part)
            if source is not None:
                found.append(source)
        elif kind is PartKind.TOOL:
            found.extend(_source_list(field_value(part, "output")))
        elif kind is PartKind.NETWORK:
            found.extend(extract_network_sources(field_value(part, "data")) or [])
        elif kind is PartKind.DYNAMIC_TOOL:
            found.extend(extract_child_sources(field_value(part, "output")))

    unique = dedupe_sources(found)
    if len(unique) != len(found):
        logger.debug(f"Dropped {len(found) - len(unique)} duplicate source(s)")
    return unique or None
