"""Inline citation parsing for ``[N]`` markers (1-indexed into a source list)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from netchat.parts.models import SourceData

_MARKER = re.compile(r"\[(\d+)\]")
_SPLIT = re.compile(r"(\[\d+\])")


@dataclass(frozen=True)
class CitationMatch:
    """A marker segment and the source it resolves to (None if out of range)."""

    index: int  # position in CitationResult.segments
    number: int  # the N in [N]
    source: SourceData | None


@dataclass(frozen=True)
class CitationResult:
    has_citations: bool
    segments: list[str] = field(default_factory=list)
    citations: list[CitationMatch] = field(default_factory=list)

    def citation_at(self, index: int) -> CitationMatch | None:
        for citation in self.citations:
            if citation.index == index:
                return citation
        return None


def has_citations(text: str) -> bool:
    return bool(_MARKER.search(text or ""))


def parse_citations(
    text: str, sources: Sequence[SourceData] | None
) -> CitationResult:
    """
    Split text into literal and marker segments and resolve each marker.

    Pure function of (text, sources); parsing the same input twice gives
    equal results. A marker whose number falls outside the source list keeps
    its literal text and resolves to None.

    Example:
        >>> result = parse_citations("See [1].", [SourceData(url="x")])
        >>> result.segments
        ['See ', '[1]', '.']
    """
    text = text or ""
    if not has_citations(text) or not sources:
        return CitationResult(has_citations=False, segments=[text], citations=[])

    segments = _SPLIT.split(text)
    citations: list[CitationMatch] = []
    for index, segment in enumerate(segments):
        match = _MARKER.fullmatch(segment)
        if not match:
            continue
        number = int(match.group(1))
        source = sources[number - 1] if 1 <= number <= len(sources) else None
        citations.append(CitationMatch(index=index, number=number, source=source))

    return CitationResult(has_citations=True, segments=segments, citations=citations)
