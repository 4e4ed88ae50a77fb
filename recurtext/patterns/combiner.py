"""Merge pattern fragments into a single recurrence descriptor.

Fragments are sorted by category priority, then specialized rules combine
the groups they recognize (two day lists, a frequency plus days, ...).
Whatever no rule consumed is merged field by field. Only the fields a
fragment claims are merged; frequencies a fragment merely suggests are
used at the end if nothing claimed one.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from recurtext.errors import PatternCombinationError, PropertyConflictError
from recurtext.models import SET_FIELDS, Frequency, RecurrenceOptions
from recurtext.patterns.base import PatternCategory, PatternResult

logger = logging.getLogger(__name__)

_FIELD_ORDER: tuple[str, ...] = tuple(RecurrenceOptions.model_fields)


def merge_fields(
    values: dict[str, Any], fragment: RecurrenceOptions, fields: Iterable[str]
) -> None:
    """Merge *fields* of *fragment* into *values* in place.

    Intervals combine by least common multiple, count and until keep the
    more restrictive value, set fields are unioned. Any other field must
    agree, otherwise PropertyConflictError is raised.
    """
    wanted = set(fields)
    for name in _FIELD_ORDER:
        if name not in wanted:
            continue
        incoming = getattr(fragment, name)
        if incoming is None:
            continue
        existing = values.get(name)
        if existing is None:
            values[name] = incoming
        elif name == "interval":
            values[name] = math.lcm(existing, incoming)
        elif name in ("count", "until"):
            values[name] = min(existing, incoming)
        elif name in SET_FIELDS:
            values[name] = tuple(dict.fromkeys((*existing, *incoming)))
        elif existing != incoming:
            raise PropertyConflictError(name, existing, incoming)


def _is(*categories: PatternCategory) -> Callable[[PatternResult], bool]:
    return lambda result: result.category in categories


def _anything(result: PatternResult) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class CombinationRule:
    """Combines the fragments it selects when ``required`` are all present.

    Each entry of ``required`` must be matched by at least ``min_count``
    selected fragments in total, and ``last`` fragments merge after the
    others. The rule stands aside while any fragment of the ``yields_to``
    category is still in the pool.
    """

    name: str
    priority: int
    selects: Callable[[PatternResult], bool]
    required: tuple[PatternCategory, ...]
    min_count: int = 2
    default_freq: Frequency | None = None
    last: PatternCategory | None = None
    yields_to: PatternCategory | None = None

    def ready(
        self, selected: Sequence[PatternResult], pool: Sequence[PatternResult]
    ) -> bool:
        if len(selected) < self.min_count:
            return False
        if self.yields_to is not None and any(
            result.category is self.yields_to for result in pool
        ):
            return False
        present = {result.category for result in selected}
        return all(category in present for category in self.required)

    def merge_order(self, selected: Sequence[PatternResult]) -> list[PatternResult]:
        return sorted(selected, key=lambda result: result.category == self.last)


DEFAULT_RULES: tuple[CombinationRule, ...] = (
    CombinationRule(
        "day_with_day",
        300,
        _is(PatternCategory.DAY_OF_WEEK),
        (PatternCategory.DAY_OF_WEEK,),
        default_freq=Frequency.WEEKLY,
        # "the second tuesday and the fourth tuesday" is monthly
        yields_to=PatternCategory.POSITION,
    ),
    CombinationRule(
        "frequency_with_day",
        250,
        _is(PatternCategory.FREQUENCY, PatternCategory.DAY_OF_WEEK),
        (PatternCategory.FREQUENCY, PatternCategory.DAY_OF_WEEK),
    ),
    CombinationRule(
        "day_with_position",
        200,
        _is(PatternCategory.DAY_OF_WEEK, PatternCategory.POSITION),
        (PatternCategory.DAY_OF_WEEK, PatternCategory.POSITION),
        default_freq=Frequency.MONTHLY,
        last=PatternCategory.POSITION,
    ),
    CombinationRule(
        "pattern_with_until",
        50,
        _anything,
        (PatternCategory.UNTIL_DATE,),
        last=PatternCategory.UNTIL_DATE,
    ),
    CombinationRule(
        "pattern_with_count",
        40,
        _anything,
        (PatternCategory.COUNT,),
        last=PatternCategory.COUNT,
    ),
)


class PatternCombiner:
    """Combine a list of fragments into one :class:`RecurrenceOptions`."""

    def __init__(self, rules: Sequence[CombinationRule] = DEFAULT_RULES) -> None:
        self.rules = tuple(sorted(rules, key=lambda rule: rule.priority, reverse=True))

    def combine(self, results: Sequence[PatternResult]) -> RecurrenceOptions:
        """Merge *results*; raises PatternCombinationError on a conflict.

        No results give default options; a single result is returned as is.
        """
        if not results:
            return RecurrenceOptions()
        if len(results) == 1:
            return results[0].options

        remaining = sorted(results, key=lambda result: result.priority, reverse=True)
        values: dict[str, Any] = {}
        merged: list[PatternResult] = []
        suggestions: list[Frequency] = []

        for rule in self.rules:
            selected = [result for result in remaining if rule.selects(result)]
            if not rule.ready(selected, remaining):
                continue
            logger.debug("Rule %s combines %d fragments", rule.name, len(selected))
            self._merge(values, rule.merge_order(selected), merged, rule.name)
            if rule.default_freq is not None:
                suggestions.append(rule.default_freq)
            taken = {id(result) for result in selected}
            remaining = [result for result in remaining if id(result) not in taken]

        self._merge(values, remaining, merged, "generic merge")

        if values.get("freq") is None:
            suggestions.extend(
                result.options.freq for result in merged if result.options.freq is not None
            )
            if suggestions:
                values["freq"] = suggestions[0]
        return RecurrenceOptions(**values)

    @staticmethod
    def _merge(
        values: dict[str, Any],
        results: Iterable[PatternResult],
        merged: list[PatternResult],
        rule_name: str,
    ) -> None:
        for result in results:
            try:
                merge_fields(values, result.options, result.set_fields)
            except PropertyConflictError as exc:
                spans = [*(done.matched_text for done in merged), result.matched_text]
                raise PatternCombinationError(
                    f"Cannot combine patterns ({rule_name}): {exc}", spans, exc
                ) from exc
            merged.append(result)
