"""
Normalization functions for ReliefHub.

This module contains pure functions for converting raw provider payloads
into internal domain models. Unknown fields are dropped and missing
optional fields get defaults here, so nothing loosely shaped travels
past the adapters.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from dateutil import parser as date_parser
from .models import RawReport, Severity, Update
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.normalize")

# CAP severities and free-form labels onto the advisory scale
SEVERITY_MAP: Dict[str, Severity] = {
    "high": "high",
    "extreme": "high",
    "severe": "high",
    "critical": "high",
    "medium": "medium",
    "moderate": "medium",
    "low": "low",
    "minor": "low",
    "unknown": "low",
}

HASHTAG_RE = re.compile(r"#\w+")


def parse_timestamp(value: Any, default: datetime) -> datetime:
    """
    Parses a timestamp into an aware UTC datetime.

    Args:
        value: datetime, ISO-8601 string or free-form date text
        default: returned when the value is absent or unparsable

    Returns:
        aware datetime in UTC
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value.strip())
        except (ValueError, OverflowError):
            log.debug(f"Unparsable timestamp, using default: {value!r}")
            return default
    else:
        return default

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_severity(value: Any, default: Severity = "medium") -> Severity:
    """Maps a free-form severity label onto high|medium|low."""
    if value is None:
        return default
    return SEVERITY_MAP.get(str(value).strip().lower(), default)


def to_update(raw: Dict[str, Any], *, source: str, fetched_at: datetime) -> Update:
    """
    Converts a raw advisory payload into an Update.

    Args:
        raw: provider payload
        source: source label used when the payload carries none
        fetched_at: fallback publication time

    Returns:
        Update model
    """
    title = str(raw.get("title") or raw.get("headline") or "").strip()
    content = str(raw.get("content") or raw.get("description") or "").strip()
    contact = raw.get("contact")

    return Update(
        id=str(raw.get("id") or raw.get("identifier") or f"{source}_{int(fetched_at.timestamp() * 1000)}"),
        source=str(raw.get("source") or source),
        title=title,
        content=content,
        url=str(raw.get("url") or ""),
        published_at=parse_timestamp(raw.get("published_at") or raw.get("sent"), fetched_at),
        severity=to_severity(raw.get("severity")),
        category=raw.get("category") or None,
        contact=str(contact) if contact else None,
    )


def extract_hashtags(text: str) -> List[str]:
    """Returns hashtags in order of appearance, without duplicates."""
    seen: List[str] = []
    for tag in HASHTAG_RE.findall(text or ""):
        if tag not in seen:
            seen.append(tag)
    return seen


def to_raw_report(raw: Dict[str, Any], *, fetched_at: datetime) -> RawReport:
    """
    Converts a raw social post payload into a RawReport.

    Any origin-supplied priority is discarded; priority is always derived.
    """
    post = str(raw.get("post") or raw.get("text") or "")
    hashtags = raw.get("hashtags")
    if not isinstance(hashtags, list):
        hashtags = extract_hashtags(post)

    return RawReport(
        id=str(raw.get("id") or ""),
        post=post,
        user=str(raw.get("user") or raw.get("author") or ""),
        timestamp=parse_timestamp(raw.get("timestamp") or raw.get("created_at"), fetched_at),
        verified=bool(raw.get("verified", False)),
        location=raw.get("location") or None,
        hashtags=[str(tag) for tag in hashtags],
    )
