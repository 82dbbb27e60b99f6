from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .codec import (
    THIS_MONTH_RELATIVE_TIME,
    THIS_WEEK_RELATIVE_TIME,
    TODAY_RELATIVE_TIME,
    relative_time_factory,
)
from .types import ReferenceTime, RelativeTimeDescriptor, RelativeTimeUnit


@dataclass
class PhraseParseResult:
    original_phrase: Optional[str]
    descriptor: Optional[RelativeTimeDescriptor]


THIS_YEAR_RELATIVE_TIME = relative_time_factory(RelativeTimeUnit.YEAR, 1, ReferenceTime.THIS_YEAR)

_FIXED_PHRASES = [
    (["today"], TODAY_RELATIVE_TIME),
    (["this week"], THIS_WEEK_RELATIVE_TIME),
    (["this month"], THIS_MONTH_RELATIVE_TIME),
    (["this year"], THIS_YEAR_RELATIVE_TIME),
]

_UNIT_WORDS = {
    "min": RelativeTimeUnit.MIN,
    "minute": RelativeTimeUnit.MIN,
    "hour": RelativeTimeUnit.HOUR,
    "day": RelativeTimeUnit.DAY,
    "week": RelativeTimeUnit.WEEK,
    "month": RelativeTimeUnit.MONTH,
    "year": RelativeTimeUnit.YEAR,
}

_LAST_N_PATTERN = re.compile(
    r"\b(?:last|past)\s+(?:(\d+)\s+)?(min|minute|hour|day|week|month|year)s?\b",
    re.IGNORECASE,
)


def parse_time_phrase(text: str) -> PhraseParseResult:
    """
    Map an English phrase to a descriptor.

    "last 7 days" and "past hour" become `now` windows with a negative count,
    which is the convention `RelativeTimeResolver.label` renders as "Last N ...".
    """
    match = _LAST_N_PATTERN.search(text)
    if match:
        amount = int(match.group(1)) if match.group(1) else 1
        unit = _UNIT_WORDS[match.group(2).lower()]
        return PhraseParseResult(
            original_phrase=match.group(0),
            descriptor=relative_time_factory(unit, -amount, ReferenceTime.NOW),
        )

    lowered = text.lower()
    for keywords, descriptor in _FIXED_PHRASES:
        for keyword in keywords:
            if keyword in lowered:
                return PhraseParseResult(original_phrase=keyword, descriptor=descriptor)

    return PhraseParseResult(original_phrase=None, descriptor=None)
