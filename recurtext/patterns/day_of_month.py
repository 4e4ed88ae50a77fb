"""Days of the month ("the 15th", "first and last day") and weekday positions
("first monday of the month")."""

from __future__ import annotations

import re

from recurtext.models import Frequency
from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import (
    DAY_WORD,
    MONTH_WORD,
    NUMERIC_ORDINAL,
    ORDINAL_WORD,
    UNIT_FREQUENCIES,
    alternation,
    day_from_word,
    ordinal_value,
)
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

_ORDINAL = rf"(?:{ORDINAL_WORD}|{NUMERIC_ORDINAL})"
# "second week" is an interval and "first monday" a position, but "last day" is a day
_LONGER_UNITS = alternation(unit for unit in UNIT_FREQUENCIES if unit != "day")
_NOT_UNIT_OR_DAY = rf"(?!\s+(?:{_LONGER_UNITS}|{DAY_WORD})s?\b)"

_POSITION_RE = re.compile(
    rf"\b(?:the\s+)?({_ORDINAL}(?:\s*(?:,|and)\s*{_ORDINAL})*)\s+({DAY_WORD})s?\b",
    re.IGNORECASE,
)
_ORDINAL_ITEM_RE = re.compile(_ORDINAL, re.IGNORECASE)
_MONTH_REFERENCE_RE = re.compile(
    r"\bof\s+(?:the|every|each)\s+month\b|\bevery\s+month\b|\bmonthly\b|\bof\s+month\b",
    re.IGNORECASE,
)

_DAY_PATTERNS: tuple[tuple[re.Pattern[str], float], ...] = (
    (
        re.compile(rf"\b(\d{{1,2}})(?:st|nd|rd|th)\b{_NOT_UNIT_OR_DAY}", re.IGNORECASE),
        0.95,
    ),
    (re.compile(r"\bday\s+(\d{1,2})\b", re.IGNORECASE), 0.9),
    (
        re.compile(
            rf"\b(?:{MONTH_WORD})\s+(\d{{1,2}})\b(?!\s*(?:st|nd|rd|th|:)|\s+times?\b)",
            re.IGNORECASE,
        ),
        0.9,
    ),
    (re.compile(r"\bon\s+the\s+(\d{1,2})\b(?!\s*(?:st|nd|rd|th|:))", re.IGNORECASE), 0.9),
    (re.compile(rf"\b({ORDINAL_WORD})\b{_NOT_UNIT_OR_DAY}", re.IGNORECASE), 0.9),
)
_DAYS_AFTER_RE = re.compile(r"\s+days?\b", re.IGNORECASE)

_EDGE_PATTERNS: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"\bbeginning\b(?=.*\bmonth\b)", re.IGNORECASE), 1),
    (re.compile(r"\bend\s+of\s+(?:the\s+)?month\b", re.IGNORECASE), -1),
)

MAX_POSITION = 5


def _is_day_interval(text: str, found: re.Match[str]) -> bool:
    """Whether "every second day" counts days rather than naming one."""
    return text[: found.start()].lower().endswith("every ") and bool(
        _DAYS_AFTER_RE.match(text, found.end())
    )


def _month_claim(doc: PhraseDocument) -> tuple[dict[str, Frequency], dict[str, Frequency]]:
    """Split the monthly frequency into (claimed, suggested) for this document."""
    if doc.find(_MONTH_REFERENCE_RE):
        return {"freq": Frequency.MONTHLY}, {}
    return {}, {"freq": Frequency.MONTHLY}


def match_weekday_position(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    found = doc.find(_POSITION_RE)
    if found is None:
        return None
    day = day_from_word(found.group(2))
    positions = [ordinal_value(item) for item in _ORDINAL_ITEM_RE.findall(found.group(1))]
    valid = [pos for pos in positions if pos is not None and 1 <= abs(pos) <= MAX_POSITION]
    if day is None or not valid:
        return None

    claimed, suggested = _month_claim(doc)
    warnings = tuple(
        f"Ignored weekday position {pos}"
        for pos in positions
        if pos is not None and pos not in valid
    )
    return PatternMatch(
        category=PatternCategory.POSITION,
        value={**claimed, "byweekday": (day,), "bysetpos": tuple(valid)},
        defaults=suggested,
        text=found.group(),
        confidence=0.95,
        warnings=warnings,
    )


def match_month_days(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    days: list[int] = []
    texts: list[tuple[int, str]] = []
    warnings: list[str] = []
    confidence = 1.0

    for pattern, score in _DAY_PATTERNS:
        for found in doc.finditer(pattern):
            if _is_day_interval(doc.text, found):
                continue
            value = ordinal_value(found.group(1))
            if value is None:
                continue
            if not (1 <= value <= 31 or value == -1):
                warnings.append(f"Ignored out-of-range day of month {value}")
                continue
            days.append(value)
            texts.append((found.start(), found.group()))
            confidence = min(confidence, score)
    for pattern, value in _EDGE_PATTERNS:
        found = doc.find(pattern)
        if found is not None:
            days.append(value)
            texts.append((found.start(), found.group()))
            confidence = min(confidence, 0.9)

    if not days:
        return None
    claimed, suggested = _month_claim(doc)
    return PatternMatch(
        category=PatternCategory.DAY_OF_MONTH,
        value={**claimed, "bymonthday": tuple(days)},
        defaults=suggested,
        text=" ".join(text for _, text in sorted(texts)),
        confidence=confidence,
        warnings=tuple(warnings),
    )


DAY_OF_MONTH_HANDLER = create_handler(
    "day_of_month",
    PatternCategory.DAY_OF_MONTH,
    90,
    (match_weekday_position, match_month_days),
    description='Days of the month such as "the 15th" or "first and last day"',
)
