"""Times of day: "at 9am", "at 14:30", "at noon", "at 9am and 5pm"."""

from __future__ import annotations

import re

from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import CLOCK_TIME
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

_TIME_LIST_RE = re.compile(
    rf"\bat\s+({CLOCK_TIME}(?:\s*(?:,|and)\s*(?:at\s+)?{CLOCK_TIME})*)",
    re.IGNORECASE,
)
_CLOCK_ITEM_RE = re.compile(
    r"(\d{1,2})(?::(\d{2}))?(?:\s*([ap])\.?m\.?)?(?!\w)|\b(noon|midday|midnight)\b",
    re.IGNORECASE,
)
_NAMED_TIMES = {"noon": 12, "midday": 12, "midnight": 0}


def _to_24h(hour: int, meridiem: str | None) -> int | None:
    if meridiem is None:
        return hour if hour <= 23 else None
    if not 1 <= hour <= 12:
        return None
    hour %= 12
    return hour + 12 if meridiem.lower() == "p" else hour


def match_time(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    hours: list[int] = []
    minutes: list[int] = []
    texts: list[str] = []
    warnings: list[str] = []

    for found in doc.finditer(_TIME_LIST_RE):
        texts.append(found.group().strip())
        for item in _CLOCK_ITEM_RE.finditer(found.group(1)):
            if item.group(4):
                hours.append(_NAMED_TIMES[item.group(4).lower()])
                minutes.append(0)
                continue
            hour = _to_24h(int(item.group(1)), item.group(3))
            minute = int(item.group(2) or 0)
            if hour is None or minute > 59:
                warnings.append(f"Ignored invalid time {item.group().strip()!r}")
                continue
            hours.append(hour)
            minutes.append(minute)

    if not hours:
        return None
    return PatternMatch(
        category=PatternCategory.TIME,
        value={"byhour": tuple(hours), "byminute": tuple(minutes)},
        text=" ".join(texts),
        confidence=0.9,
        warnings=tuple(warnings),
    )


TIME_OF_DAY_HANDLER = create_handler(
    "time_of_day",
    PatternCategory.TIME,
    40,
    (match_time,),
    description='Times of day such as "at 9am" or "at noon"',
)
