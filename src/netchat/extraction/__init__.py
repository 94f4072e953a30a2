"""
Derived-data extractors shared by renderers and the dispatch loop.

All functions are pure and total: absent data yields None or an empty
result, never an exception.
"""

from .citations import CitationMatch, CitationResult, has_citations, parse_citations
from .network import (
    MAX_CONTEXT_TOKENS,
    ConversationUsage,
    NetworkSummary,
    conversation_usage,
    extract_network_data,
    extract_network_reason,
    extract_network_weather,
    is_duplicate_reasoning,
    is_weather_data,
)
from .sources import (
    dedupe_sources,
    extract_child_sources,
    extract_network_sources,
    extract_part_sources,
    extract_sources,
    normalize_source,
)

__all__ = [
    "CitationMatch",
    "CitationResult",
    "ConversationUsage",
    "MAX_CONTEXT_TOKENS",
    "NetworkSummary",
    "conversation_usage",
    "dedupe_sources",
    "extract_child_sources",
    "extract_network_data",
    "extract_network_reason",
    "extract_network_sources",
    "extract_network_weather",
    "extract_part_sources",
    "extract_sources",
    "has_citations",
    "is_duplicate_reasoning",
    "is_weather_data",
    "normalize_source",
    "parse_citations",
]
