"""
Per-user deduplication of comment star ratings.

A user who rates twice has changed their mind: only their most recent
rating counts. Deduplication happens within one resource's comment set; the
caller never passes comments from several resources together.
"""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from common.logging.logger import get_logger
from ratings_core.types import Comment
from engagement.scoring.parser import StarCommentParser

logger = get_logger("rating_dedup")

# Malformed timestamps sort before every real instant
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Accepts the ``Z`` suffix the discussion API emits. Naive timestamps are
    taken as UTC. Unparseable values map to the earliest representable
    instant and are logged; they never raise.
    """
    text = (value or "").strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Unparseable comment timestamp %r; treating as earliest", value)
        return _EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class UserDeduplicator:
    """
    Collapses each author's ratings down to their latest one.

    Comments without a rating are dropped. Comments without an author are
    each kept as their own entry. When one author has two ratings with the
    same timestamp, the one later in the input wins.

    Args:
        parser: Optional comment parser (defaults to the built-in formats).
    """

    def __init__(self, parser: Optional[StarCommentParser] = None):
        self.parser = parser or StarCommentParser()

    def deduplicate(self, comments: Iterable[Comment]) -> List[int]:
        """Return one rating per author, in order of each author's first rating."""
        latest: Dict[Tuple[str, object], Tuple[datetime, int]] = {}

        for index, comment in enumerate(comments):
            rating = self.parser.parse(comment.body)
            if rating is None:
                continue

            if comment.author:
                key: Tuple[str, object] = ("user", comment.author)
            else:
                key = ("anonymous", index)

            created_at = parse_timestamp(comment.created_at)
            existing = latest.get(key)
            if existing is None or created_at >= existing[0]:
                latest[key] = (created_at, rating)

        return [rating for _created_at, rating in latest.values()]


def deduplicate_ratings_by_user(comments: Iterable[Comment]) -> List[int]:
    """Final star rating of every distinct author in *comments*."""
    return UserDeduplicator().deduplicate(comments)
