"""Building blocks shared by all pattern handlers."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from recurtext.errors import ConfigurationError
from recurtext.models import RecurrenceOptions
from recurtext.nlp.dates import DateResolver
from recurtext.nlp.document import PhraseDocument
from recurtext.nlp.vocabulary import (
    END_DATE_TERMS,
    RANGE_TERMS,
    alternation,
    day_from_word,
    month_from_word,
)


class PatternCategory(StrEnum):
    INTERVAL = "interval"
    FREQUENCY = "frequency"
    DAY_OF_WEEK = "day_of_week"
    DAY_OF_MONTH = "day_of_month"
    MONTH = "month"
    POSITION = "position"
    COUNT = "count"
    UNTIL_DATE = "until_date"
    TIME = "time"


# Higher runs first; an interval phrase implies a frequency that a bare
# frequency word must not override
CATEGORY_PRIORITY: dict[PatternCategory, int] = {
    PatternCategory.INTERVAL: 300,
    PatternCategory.FREQUENCY: 200,
    PatternCategory.DAY_OF_WEEK: 100,
    PatternCategory.DAY_OF_MONTH: 90,
    PatternCategory.MONTH: 80,
    PatternCategory.POSITION: 70,
    PatternCategory.COUNT: 60,
    PatternCategory.UNTIL_DATE: 50,
    PatternCategory.TIME: 40,
}


@dataclass(frozen=True, slots=True)
class HandlerContext:
    """Per-parse inputs that matchers may need besides the text."""

    anchor: datetime
    date_resolver: DateResolver


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """What one matcher recognized.

    ``value`` holds the descriptor fields the match sets. ``defaults``
    holds fields it only suggests (a bare day name suggests weekly), which
    any explicit value from another fragment overrides.
    """

    category: PatternCategory
    value: Mapping[str, Any]
    text: str
    confidence: float = 1.0
    defaults: Mapping[str, Any] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PatternResult:
    """Options fragment produced by one handler from one sub-phrase."""

    options: RecurrenceOptions
    handler: str
    category: PatternCategory
    matched_text: str
    confidence: float
    is_partial: bool = False
    set_fields: frozenset[str] = frozenset()
    warnings: tuple[str, ...] = ()

    @property
    def priority(self) -> int:
        return CATEGORY_PRIORITY[self.category]


Matcher = Callable[[PhraseDocument, HandlerContext], PatternMatch | None]
Processor = Callable[[PatternMatch], tuple[RecurrenceOptions, frozenset[str]]]


def build_fragment(match: PatternMatch) -> tuple[RecurrenceOptions, frozenset[str]]:
    """Default processor: suggested defaults overlaid by the matched values."""
    options = RecurrenceOptions(**{**match.defaults, **match.value})
    return options, frozenset(match.value)


@dataclass(frozen=True, slots=True)
class PatternHandler:
    """A named, prioritized group of matchers sharing one processor.

    Matchers are tried in order and the first match wins.
    """

    name: str
    category: PatternCategory
    priority: int
    matchers: tuple[Matcher, ...]
    processor: Processor = build_fragment
    description: str = ""
    partial: bool = False
    sees_end_clause: bool = False

    def apply(self, doc: PhraseDocument, context: HandlerContext) -> PatternResult | None:
        view = doc if self.sees_end_clause else strip_end_clause(doc)
        for matcher in self.matchers:
            match = matcher(view, context)
            if match is None:
                continue
            options, set_fields = self.processor(match)
            return PatternResult(
                options=options,
                handler=self.name,
                category=match.category,
                matched_text=match.text,
                confidence=match.confidence,
                is_partial=self.partial,
                set_fields=set_fields,
                warnings=match.warnings,
            )
        return None


def create_handler(
    name: str,
    category: PatternCategory,
    priority: int,
    matchers: Sequence[Matcher],
    processor: Processor = build_fragment,
    *,
    description: str = "",
    partial: bool = False,
    sees_end_clause: bool = False,
) -> PatternHandler:
    """Validate and build a :class:`PatternHandler`."""
    if not name.strip():
        raise ConfigurationError("Pattern handler name is required")
    if not matchers:
        raise ConfigurationError(f"Pattern handler {name!r} requires at least one matcher")
    if not callable(processor):
        raise ConfigurationError(f"Pattern handler {name!r} requires a callable processor")
    return PatternHandler(
        name=name,
        category=category,
        priority=priority,
        matchers=tuple(matchers),
        processor=processor,
        description=description,
        partial=partial,
        sees_end_clause=sees_end_clause,
    )


_END_TERM_RE = re.compile(rf"\b(?:{alternation(END_DATE_TERMS)})\b", re.IGNORECASE)


def _is_range(text: str, match: re.Match[str]) -> bool:
    # "monday through friday" is a range, not an end date
    if match.group().lower() not in RANGE_TERMS:
        return False
    before = text[: match.start()].split()
    if not before:
        return False
    previous = before[-1]
    return day_from_word(previous) is not None or month_from_word(previous) is not None


def find_end_clause(doc: PhraseDocument) -> re.Match[str] | None:
    """First end-date term in *doc* that does not join a day or month range."""
    for match in doc.finditer(_END_TERM_RE):
        if not _is_range(doc.text, match):
            return match
    return None


def strip_end_clause(doc: PhraseDocument) -> PhraseDocument:
    """The document with its end-date clause ("until december") removed."""
    match = find_end_clause(doc)
    if match is None:
        return doc
    return doc.without(match.start(), len(doc.text))
