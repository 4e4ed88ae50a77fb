"""End dates: "until december", "ending on 12/31/2026", "till next month"."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time

from recurtext.models import RecurrenceOptions
from recurtext.nlp.dates import parse_numeric_date
from recurtext.nlp.document import PhraseDocument
from recurtext.patterns.base import (
    HandlerContext,
    PatternCategory,
    PatternMatch,
    create_handler,
    find_end_clause,
)

logger = logging.getLogger(__name__)

_TRAILING = " ,.;"

# Confidence for an end clause whose date could not be read
UNRESOLVED_CONFIDENCE = 0.5


def _unresolved(doc: PhraseDocument, clause: re.Match[str], warning: str) -> PatternMatch:
    return PatternMatch(
        category=PatternCategory.UNTIL_DATE,
        value={},
        text=doc.text[clause.start() :].strip(_TRAILING),
        confidence=UNRESOLVED_CONFIDENCE,
        warnings=(warning,),
    )


def match_end_date(doc: PhraseDocument, context: HandlerContext) -> PatternMatch | None:
    clause = find_end_clause(doc)
    if clause is None:
        return None
    expression = doc.text[clause.end() :].strip(_TRAILING)
    if not expression:
        return _unresolved(doc, clause, f"Missing end date after {clause.group()!r}")

    resolved = context.date_resolver.resolve(expression, anchor=context.anchor)
    confidence = 0.9
    if resolved is None:
        resolved = parse_numeric_date(expression, anchor=context.anchor.date())
        confidence = 0.8
    if resolved is None:
        logger.debug("Could not resolve end date %r", expression)
        return _unresolved(doc, clause, f"Could not resolve end date {expression!r}")
    if isinstance(resolved, datetime):
        resolved = resolved.date()

    warnings: tuple[str, ...] = ()
    if resolved < context.anchor.date():
        warnings = (f"End date {resolved.isoformat()} is before the start date",)
    return PatternMatch(
        category=PatternCategory.UNTIL_DATE,
        value={"until": resolved},
        text=doc.text[clause.start() :],
        confidence=confidence,
        warnings=warnings,
    )


def end_of_day(match: PatternMatch) -> tuple[RecurrenceOptions, frozenset[str]]:
    """Processor: the resolved date becomes the last instant of that day."""
    until: date | None = match.value.get("until")
    if until is None:
        return RecurrenceOptions(), frozenset()
    options = RecurrenceOptions(until=datetime.combine(until, time.max))
    return options, frozenset({"until"})


UNTIL_DATE_HANDLER = create_handler(
    "until_date",
    PatternCategory.UNTIL_DATE,
    50,
    (match_end_date,),
    end_of_day,
    description='End dates such as "until december 31st"',
    partial=True,
    sees_end_clause=True,
)
