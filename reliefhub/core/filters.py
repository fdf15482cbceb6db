"""
Filter and search functions for ReliefHub.

Pure functions over ranked sequences of updates or social reports.
Composed filters have AND semantics and commute.
"""

from typing import List, Optional, Sequence, TypeVar, Union
from .models import SocialReport, Update

Item = TypeVar("Item", Update, SocialReport)


def split_keywords(keywords: Optional[str]) -> List[str]:
    """
    Splits a comma-separated keyword string into search terms.

    Args:
        keywords: raw keyword string, e.g. "Food, Shelter"

    Returns:
        lower-cased, trimmed, non-empty terms in input order
    """
    if not keywords:
        return []
    terms = [term.strip().lower() for term in keywords.split(",")]
    return [term for term in terms if term]


def _matches_field(value: Optional[str], wanted: str) -> bool:
    return bool(value) and value.lower() == wanted.lower()


def filter_by_category(items: Sequence[Update], category: Optional[str]) -> List[Update]:
    """Keeps updates whose category equals `category`, ignoring case."""
    if not category:
        return list(items)
    return [item for item in items if _matches_field(item.category, category)]


def filter_by_severity(items: Sequence[Update], severity: Optional[str]) -> List[Update]:
    """Keeps updates whose severity equals `severity`, ignoring case."""
    if not severity:
        return list(items)
    return [item for item in items if _matches_field(item.severity, severity)]


def _search_text(item: Union[Update, SocialReport]) -> str:
    if isinstance(item, SocialReport):
        return item.post.lower()
    return f"{item.title} {item.content}".lower()


def search(items: Sequence[Item], keywords: Optional[str]) -> List[Item]:
    """
    Keeps items where any keyword term occurs in their text.

    Update text is title plus content; report text is the post.
    Empty or absent keywords return the input unchanged.

    Args:
        items: ranked items
        keywords: comma-separated keyword string

    Returns:
        matching items in input order
    """
    terms = split_keywords(keywords)
    if not terms:
        return list(items)
    return [item for item in items if any(term in _search_text(item) for term in terms)]


def apply_limit(items: Sequence[Item], limit: Optional[int]) -> List[Item]:
    """Truncates an already ranked sequence; None or non-positive means no limit."""
    if limit is None or limit <= 0:
        return list(items)
    return list(items[:limit])
