"""Star rating extraction from free-text discussion comments."""

from typing import List, Optional

from common.logging.logger import get_logger
from engagement.scoring.matchers import BUILTIN_MATCHERS
from engagement.scoring.protocols import RatingMatcher
from engagement.scoring.registry import MatcherRegistry

logger = get_logger("rating_parser")


class StarCommentParser:
    """
    Tries each registered format in priority order and returns the first hit.

    Matching is per line, so a rating quoted inside a reply (``> Rating: ...``)
    or mentioned mid-sentence is not picked up. Every line is offered to a
    matcher before the next matcher runs: a current-format rating anywhere in
    the body beats a legacy header above it.

    Args:
        matchers: Optional list of matchers (defaults to BUILTIN_MATCHERS).
    """

    def __init__(self, matchers: Optional[List[RatingMatcher]] = None):
        self.registry = MatcherRegistry()
        for m in (BUILTIN_MATCHERS if matchers is None else matchers):
            self.registry.register(m)

    def parse(self, body: Optional[str]) -> Optional[int]:
        """Return the rating in [1, 5], or None when the comment carries no rating."""
        if not body or not isinstance(body, str):
            return None

        lines = body.splitlines()
        for matcher in self.registry.matchers:
            for line in lines:
                rating = matcher.match(line)
                if rating is not None:
                    logger.debug("Matched %s rating %d", matcher.name, rating)
                    return rating
        return None


_default_parser = StarCommentParser()


def parse_star_rating_from_comment(body: Optional[str]) -> Optional[int]:
    """Extract an explicit 1-5 star rating from *body* using the built-in formats."""
    return _default_parser.parse(body)
