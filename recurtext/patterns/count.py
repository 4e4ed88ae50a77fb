"""Occurrence counts: "for 10 times", "5 occurrences"."""

from __future__ import annotations

import re

from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import NUMBER_WORDS, alternation, number_value
from recurtext.patterns.base import HandlerContext, PatternCategory, PatternMatch, create_handler

_COUNT_RE = re.compile(
    rf"\b(?:for\s+)?(\d+|{alternation(NUMBER_WORDS)})\s+(?:times|occurrences)\b", re.IGNORECASE
)


def match_count(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    found = doc.find(_COUNT_RE)
    if found is None:
        return None
    count = number_value(found.group(1))
    if not count:
        return None
    return PatternMatch(
        category=PatternCategory.COUNT,
        value={"count": count},
        text=found.group(),
        confidence=0.95,
    )


COUNT_HANDLER = create_handler(
    "count",
    PatternCategory.COUNT,
    60,
    (match_count,),
    description='Occurrence limits such as "for 10 times"',
    partial=True,
)
