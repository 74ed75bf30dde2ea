"""Current comment format: ``Rating: ⭐⭐⭐⭐``."""

import re
from typing import Optional

from engagement.scoring.protocols import RatingMatcher

STAR_GLYPH = "\u2b50"
# Emoji pickers often append the variation selector U+FE0F to each star
STAR_PATTERN = STAR_GLYPH + "\ufe0f?"


class RatingLineMatcher(RatingMatcher):
    """Counts the star glyphs after ``Rating:``; the glyph count is the rating."""

    PATTERN = re.compile(r"^\s*Rating:\s*((?:" + STAR_PATTERN + r")+)")

    @property
    def name(self) -> str:
        return "rating_line"

    def match(self, line: str) -> Optional[int]:
        found = self.PATTERN.match(line)
        if not found:
            return None
        stars = found.group(1).count(STAR_GLYPH)
        if 1 <= stars <= 5:
            return stars
        return None
