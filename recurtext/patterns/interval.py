"""Intervals: "every 3 days", "every other week", "every second month"."""

from __future__ import annotations

import re

from recurtext.models import Frequency
from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import (
    DAY_WORD,
    NUMBER_WORDS,
    ORDINAL_WORDS,
    UNIT_FREQUENCIES,
    alternation,
    number_value,
    ordinal_value,
)
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

_UNIT = alternation(UNIT_FREQUENCIES)
_INTERVAL_ORDINAL = alternation(word for word, value in ORDINAL_WORDS.items() if 2 <= value <= 12)

_NUMERIC_RE = re.compile(
    rf"\bevery\s+(\d+|{alternation(NUMBER_WORDS)})\s+({_UNIT})s?\b", re.IGNORECASE
)
_OTHER_UNIT_RE = re.compile(rf"\bevery\s+other\s+({_UNIT})s?\b", re.IGNORECASE)
_OTHER_WEEKEND_RE = re.compile(r"\bevery\s+other\s+weekends?\b", re.IGNORECASE)
_OTHER_DAY_RE = re.compile(rf"\bevery\s+other\s+(?:{DAY_WORD})s?\b", re.IGNORECASE)
_ORDINAL_RE = re.compile(
    rf"\bevery\s+({_INTERVAL_ORDINAL}|\d{{1,2}}(?:st|nd|rd|th))\s+({_UNIT})\b",
    re.IGNORECASE,
)


def _interval(text: str, freq: Frequency, interval: int, confidence: float) -> PatternMatch:
    return PatternMatch(
        category=PatternCategory.INTERVAL,
        value={"freq": freq, "interval": interval},
        text=text,
        confidence=confidence,
    )


def match_every_n(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    found = doc.find(_NUMERIC_RE)
    if found is None:
        return None
    interval = number_value(found.group(1))
    if not interval:
        return None
    return _interval(found.group(), UNIT_FREQUENCIES[found.group(2).lower()], interval, 1.0)


def match_every_other(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    found = doc.find(_OTHER_UNIT_RE)
    if found is not None:
        return _interval(found.group(), UNIT_FREQUENCIES[found.group(1).lower()], 2, 1.0)

    # "every other weekend" and "every other monday" alternate weeks
    found = doc.find(_OTHER_WEEKEND_RE) or doc.find(_OTHER_DAY_RE)
    if found is not None:
        return _interval(found.group(), Frequency.WEEKLY, 2, 0.95)
    return None


def match_every_ordinal(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    found = doc.find(_ORDINAL_RE)
    if found is None:
        return None
    interval = ordinal_value(found.group(1))
    if interval is None or interval < 1:
        return None
    return _interval(found.group(), UNIT_FREQUENCIES[found.group(2).lower()], interval, 0.95)


INTERVAL_HANDLER = create_handler(
    "interval",
    PatternCategory.INTERVAL,
    300,
    (match_every_n, match_every_other, match_every_ordinal),
    description='Intervals such as "every 2 weeks" or "every other day"',
)
