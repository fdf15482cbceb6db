"""
Cache key derivation for ReliefHub.

Keys are readable strings of the form ``<operation>:<param>:...`` built
from normalized parameters, so that equivalent queries share one entry.
Absent parameters collapse to a fixed sentinel. Present parameters are
percent-encoded, so a ``:`` or ``,`` inside a value cannot shift segments
and a value spelled like a sentinel never matches the sentinel itself.
"""

from typing import Iterable, List, Optional, Union
from urllib.parse import quote
from .filters import split_keywords

ALL = "all"
NONE = "none"
GENERAL = "general"

SENTINELS = frozenset({ALL, NONE, GENERAL})

# Reverse geocoding keys round to roughly one metre
COORD_PRECISION = 5

SourceSelection = Union[str, Iterable[str], None]


def encode_segment(value: str) -> str:
    """Percent-encodes one key segment; sentinel spellings get their first character encoded."""
    encoded = quote(value, safe="")
    if encoded in SENTINELS:
        encoded = f"%{ord(encoded[0]):02X}{encoded[1:]}"
    return encoded


def normalize_text(value: Optional[str], sentinel: str = NONE) -> str:
    """Case-folds and trims a free-text parameter."""
    if value is None:
        return sentinel
    cleaned = value.strip().lower()
    return cleaned or sentinel


def _text_segment(value: Optional[str], sentinel: str) -> str:
    cleaned = normalize_text(value, "")
    return encode_segment(cleaned) if cleaned else sentinel


def normalize_sources(sources: SourceSelection) -> List[str]:
    """
    Normalizes a source selection to a sorted, de-duplicated id list.

    Args:
        sources: comma-separated string, iterable of ids, or None

    Returns:
        ["all"] when the selection is empty or contains "all",
        otherwise the sorted ids
    """
    if sources is None:
        return [ALL]
    if isinstance(sources, str):
        sources = sources.split(",")
    ids = {s.strip().lower() for s in sources if s and s.strip()}
    if not ids or ALL in ids:
        return [ALL]
    return sorted(ids)


def _sources_segment(sources: SourceSelection) -> str:
    ids = normalize_sources(sources)
    if ids == [ALL]:
        return ALL
    return ",".join(quote(s, safe="") for s in ids)


def normalize_keywords(keywords: Optional[str], sentinel: str = NONE) -> str:
    """Sorted, de-duplicated keyword terms joined by commas."""
    terms = sorted(set(split_keywords(keywords)))
    if not terms:
        return sentinel
    if len(terms) == 1:
        return encode_segment(terms[0])
    return ",".join(quote(term, safe="") for term in terms)


def _coord(value: float) -> str:
    # 0.0 + x folds -0.0 into 0.0
    return f"{round(value, COORD_PRECISION) + 0.0:.{COORD_PRECISION}f}"


def geocode_key(location: str) -> str:
    return f"geocode:{normalize_text(location)}"


def reverse_geocode_key(lat: float, lng: float) -> str:
    return f"reverse_geocode:{_coord(lat)},{_coord(lng)}"


def official_updates_key(disaster_id: str, sources: SourceSelection,
                         category: Optional[str] = None,
                         severity: Optional[str] = None,
                         keywords: Optional[str] = None) -> str:
    return ":".join([
        "official_updates",
        quote(disaster_id.strip(), safe=""),
        _sources_segment(sources),
        _text_segment(category, ALL),
        _text_segment(severity, ALL),
        normalize_keywords(keywords),
    ])


def category_updates_key(category: str, sources: SourceSelection) -> str:
    return f"updates_by_category:{_text_segment(category, NONE)}:{_sources_segment(sources)}"


def search_updates_key(query: str, sources: SourceSelection) -> str:
    return f"search_updates:{normalize_keywords(query)}:{_sources_segment(sources)}"


def social_media_key(disaster_id: str, keywords: Optional[str] = None,
                     disaster_type: Optional[str] = None) -> str:
    return ":".join([
        "social_media",
        quote(disaster_id.strip(), safe=""),
        normalize_keywords(keywords, ALL),
        _text_segment(disaster_type, GENERAL),
    ])
