"""
Social report classification for ReliefHub.

Derives priority and relevance for raw social posts. Both are pure
functions of the post, its hashtags, its location and the caller's
keywords.
"""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from .filters import split_keywords
from .models import Priority, RawReport, SocialReport
from .ranking import rank_reports

# First matching rule wins; order matters
PRIORITY_RULES: Tuple[Tuple[Priority, Tuple[str, ...]], ...] = (
    ("urgent", ("urgent", "sos", "emergency", "evacuate")),
    ("high", ("need", "help", "stranded", "trapped")),
    ("medium", ("offering", "volunteer", "shelter", "donate")),
)

POST_WEIGHT = 3
HASHTAG_WEIGHT = 2
LOCATION_WEIGHT = 1


def classify_priority(post: str) -> Priority:
    """
    Assigns a priority from the post text.

    Args:
        post: raw post text

    Returns:
        the priority of the first rule with a matching word, or "low"
    """
    text = post.lower()
    for priority, words in PRIORITY_RULES:
        if any(word in text for word in words):
            return priority
    return "low"


def relevance_score(report: RawReport, keywords: Optional[str]) -> int:
    """
    Scores how well a report matches the caller's keywords.

    Each term adds 3 when found in the post, 2 when found in any hashtag
    and 1 when found in the location. Without keywords every report
    scores 1.

    Args:
        report: raw report
        keywords: comma-separated keyword string

    Returns:
        summed score
    """
    terms = split_keywords(keywords)
    if not terms:
        return 1

    post = report.post.lower()
    hashtags = [tag.lower() for tag in report.hashtags]
    location = (report.location or "").lower()

    score = 0
    for term in terms:
        if term in post:
            score += POST_WEIGHT
        if any(term in tag for tag in hashtags):
            score += HASHTAG_WEIGHT
        if location and term in location:
            score += LOCATION_WEIGHT
    return score


def matches_report(report: RawReport, keywords: Optional[str], disaster_type: Optional[str]) -> bool:
    """
    Checks a raw report against keyword and disaster type filters.

    A report passes the keyword filter when any term occurs in the post or
    in a hashtag. The disaster type, when given, must independently occur
    in the post or in a hashtag.
    """
    post = report.post.lower()
    hashtags = [tag.lower() for tag in report.hashtags]

    def _found(term: str) -> bool:
        return term in post or any(term in tag for tag in hashtags)

    terms = split_keywords(keywords)
    if terms and not any(_found(term) for term in terms):
        return False

    if disaster_type and disaster_type.strip():
        if not _found(disaster_type.strip().lower()):
            return False

    return True


def classify_report(report: RawReport, keywords: Optional[str], processed_at: datetime) -> SocialReport:
    """Builds the classified report for one raw post."""
    return SocialReport(
        **report.model_dump(include=set(RawReport.model_fields)),
        priority=classify_priority(report.post),
        relevance_score=relevance_score(report, keywords),
        processed_at=processed_at,
    )


def process_reports(reports: Sequence[RawReport], keywords: Optional[str], processed_at: datetime) -> List[SocialReport]:
    """Classifies, scores and ranks raw reports."""
    classified = [classify_report(report, keywords, processed_at) for report in reports]
    return rank_reports(classified)
