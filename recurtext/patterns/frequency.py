"""Frequency words: "daily", "every week", "every weekday"."""

from __future__ import annotations

import re

from recurtext.models import WEEKDAYS, WEEKEND, Frequency, Weekday
from recurtext.nlp.document import PhraseDocument
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

# (pattern, frequency, confidence); single words are the least ambiguous
_LITERALS: tuple[tuple[re.Pattern[str], Frequency, float], ...] = (
    (re.compile(r"\bdaily\b", re.IGNORECASE), Frequency.DAILY, 1.0),
    (re.compile(r"\bweekly\b", re.IGNORECASE), Frequency.WEEKLY, 1.0),
    (re.compile(r"\bmonthly\b", re.IGNORECASE), Frequency.MONTHLY, 1.0),
    (re.compile(r"\b(?:yearly|annually)\b", re.IGNORECASE), Frequency.YEARLY, 1.0),
    (re.compile(r"\bevery\s+day\b", re.IGNORECASE), Frequency.DAILY, 0.95),
    (re.compile(r"\bevery\s+week\b", re.IGNORECASE), Frequency.WEEKLY, 0.95),
    (re.compile(r"\bevery\s+month\b", re.IGNORECASE), Frequency.MONTHLY, 0.95),
    (re.compile(r"\bevery\s+year\b", re.IGNORECASE), Frequency.YEARLY, 0.95),
)

_GROUPS: tuple[tuple[re.Pattern[str], tuple[Weekday, ...]], ...] = (
    (re.compile(r"\bevery\s+weekdays?\b", re.IGNORECASE), WEEKDAYS),
    (re.compile(r"\bevery\s+weekends?\b", re.IGNORECASE), WEEKEND),
)


def match_day_group(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    for pattern, days in _GROUPS:
        found = doc.find(pattern)
        if found is not None:
            return PatternMatch(
                category=PatternCategory.FREQUENCY,
                value={"freq": Frequency.WEEKLY, "byweekday": days},
                text=found.group(),
            )
    return None


def match_literal(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    for pattern, freq, confidence in _LITERALS:
        found = doc.find(pattern)
        if found is not None:
            return PatternMatch(
                category=PatternCategory.FREQUENCY,
                value={"freq": freq},
                text=found.group(),
                confidence=confidence,
            )
    return None


FREQUENCY_HANDLER = create_handler(
    "frequency",
    PatternCategory.FREQUENCY,
    200,
    (match_day_group, match_literal),
    description='Frequency words such as "daily", "every month" or "every weekday"',
)
