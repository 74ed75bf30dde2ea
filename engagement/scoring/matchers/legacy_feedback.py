"""Legacy comment format: ``**Feedback** (4 ⭐⭐⭐⭐)``."""

import re
from typing import Optional

from engagement.scoring.protocols import RatingMatcher
from engagement.scoring.matchers.rating_line import STAR_PATTERN


class LegacyFeedbackMatcher(RatingMatcher):
    """
    Reads the explicit integer in the old feedback header.

    The integer wins over the glyph count: ``(3 ⭐⭐⭐⭐⭐)`` is a 3.
    """

    PATTERN = re.compile(r"^\s*\*\*Feedback\*\*\s*\((\d)\s*" + STAR_PATTERN)

    @property
    def name(self) -> str:
        return "legacy_feedback"

    def match(self, line: str) -> Optional[int]:
        found = self.PATTERN.match(line)
        if not found:
            return None
        rating = int(found.group(1))
        if 1 <= rating <= 5:
            return rating
        return None
