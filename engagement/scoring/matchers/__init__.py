"""Built-in comment rating matchers, in priority order."""

from engagement.scoring.matchers.rating_line import RatingLineMatcher, STAR_GLYPH
from engagement.scoring.matchers.legacy_feedback import LegacyFeedbackMatcher
from engagement.scoring.matchers.leading_digit import LeadingDigitMatcher

BUILTIN_MATCHERS = [
    RatingLineMatcher(),
    LegacyFeedbackMatcher(),
    LeadingDigitMatcher(),
]

__all__ = [
    "RatingLineMatcher",
    "LegacyFeedbackMatcher",
    "LeadingDigitMatcher",
    "STAR_GLYPH",
    "BUILTIN_MATCHERS",
]
