"""Months of the year: "in january", "every march or june", "april to june", "march 15th"."""

from __future__ import annotations

import re

from recurtext.models import Frequency
from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import MONTH_WORD, RANGE_TERMS, alternation, month_from_word
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

_RANGE_RE = re.compile(
    rf"\b({MONTH_WORD})\s+(?:{alternation(RANGE_TERMS)})\s+({MONTH_WORD})\b", re.IGNORECASE
)
# A bare month name is too ambiguous ("may"), so a preposition or a day
# number must come with it
_MONTH_LIST_RE = re.compile(
    rf"\b(?:in|during|every|of|on)\s+((?:{MONTH_WORD})(?:\s*(?:,|or)\s*(?:{MONTH_WORD}))*)\b"
    rf"|\b({MONTH_WORD})(?=\s+\d{{1,2}}(?:st|nd|rd|th)?\b)",
    re.IGNORECASE,
)
_MONTH_RE = re.compile(rf"\b(?:{MONTH_WORD})\b", re.IGNORECASE)


def expand_month_range(first: int, last: int) -> tuple[int, ...]:
    """Months from *first* to *last* inclusive, wrapping past December."""
    span = (last - first) % 12
    return tuple((first - 1 + step) % 12 + 1 for step in range(span + 1))


def match_month_range(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    found = doc.find(_RANGE_RE)
    if found is None:
        return None
    first, last = month_from_word(found.group(1)), month_from_word(found.group(2))
    if first is None or last is None:
        return None
    return PatternMatch(
        category=PatternCategory.MONTH,
        value={"bymonth": expand_month_range(first, last)},
        defaults={"freq": Frequency.YEARLY},
        text=found.group(),
        confidence=0.95,
    )


def match_months(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    months: list[int] = []
    texts: list[str] = []
    for found in doc.finditer(_MONTH_LIST_RE):
        for name in _MONTH_RE.findall(found.group(1) or found.group(2)):
            month = month_from_word(name)
            if month is not None:
                months.append(month)
        texts.append(found.group())
    if not months:
        return None
    return PatternMatch(
        category=PatternCategory.MONTH,
        value={"bymonth": tuple(months)},
        defaults={"freq": Frequency.YEARLY},
        text=" ".join(texts),
        confidence=0.9,
    )


MONTH_HANDLER = create_handler(
    "month",
    PatternCategory.MONTH,
    80,
    (match_month_range, match_months),
    description='Months such as "in january" or "january through march"',
)
