"""Fallback format: a line that starts with ``N ⭐``."""

import re
from typing import Optional

from engagement.scoring.protocols import RatingMatcher
from engagement.scoring.matchers.rating_line import STAR_PATTERN


class LeadingDigitMatcher(RatingMatcher):
    """Digit at the very start of a line followed by a star glyph."""

    PATTERN = re.compile(r"^(\d)\s*" + STAR_PATTERN)

    @property
    def name(self) -> str:
        return "leading_digit"

    def match(self, line: str) -> Optional[int]:
        found = self.PATTERN.match(line)
        if not found:
            return None
        rating = int(found.group(1))
        if 1 <= rating <= 5:
            return rating
        return None
