"""Day names: "monday", "tues and thurs", "monday through friday", "weekends"."""

from __future__ import annotations

import re

from recurtext.models import WEEKDAYS, WEEKEND, Frequency, Weekday
from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import DAY_WORD, RANGE_TERMS, alternation, day_from_word
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

_RANGE_RE = re.compile(
    rf"\b({DAY_WORD})s?\s+(?:{alternation(RANGE_TERMS)})\s+({DAY_WORD})s?\b", re.IGNORECASE
)
_GROUPS: tuple[tuple[re.Pattern[str], tuple[Weekday, ...]], ...] = (
    (re.compile(r"\bweekdays?\b", re.IGNORECASE), WEEKDAYS),
    (re.compile(r"\bweekends?\b", re.IGNORECASE), WEEKEND),
)
_DAY_RE = re.compile(rf"\b({DAY_WORD})s?\b", re.IGNORECASE)
_RECURRING_RE = re.compile(r"\b(?:every|on)\b|\b[a-z]+days\b", re.IGNORECASE)


def expand_day_range(first: Weekday, last: Weekday) -> tuple[Weekday, ...]:
    """Days from *first* to *last* inclusive, wrapping past Sunday."""
    order = tuple(Weekday)
    span = (last.index - first.index) % len(order)
    return tuple(order[(first.index + step) % len(order)] for step in range(span + 1))


def match_days(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    days: list[Weekday] = []
    spans: list[tuple[int, int]] = []

    def free(match: re.Match[str]) -> bool:
        return all(match.end() <= start or match.start() >= end for start, end in spans)

    for found in doc.finditer(_RANGE_RE):
        first, last = day_from_word(found.group(1)), day_from_word(found.group(2))
        if first is not None and last is not None:
            days.extend(expand_day_range(first, last))
            spans.append(found.span())
    for pattern, group in _GROUPS:
        for found in doc.finditer(pattern):
            if free(found):
                days.extend(group)
                spans.append(found.span())
    for found in doc.finditer(_DAY_RE):
        day = day_from_word(found.group(1))
        if day is not None and free(found):
            days.append(day)
            spans.append(found.span())

    if not days:
        return None
    start = min(span[0] for span in spans)
    end = max(span[1] for span in spans)
    return PatternMatch(
        category=PatternCategory.DAY_OF_WEEK,
        value={"byweekday": tuple(days)},
        defaults={"freq": Frequency.WEEKLY},
        text=doc.text[start:end],
        confidence=1.0 if doc.find(_RECURRING_RE) else 0.9,
    )


DAY_OF_WEEK_HANDLER = create_handler(
    "day_of_week",
    PatternCategory.DAY_OF_WEEK,
    100,
    (match_days,),
    description='Day names and groups such as "monday and friday" or "weekends"',
)
