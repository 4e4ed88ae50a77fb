"""Pattern handlers in priority order, plus the combiner that merges their fragments."""

from __future__ import annotations

from collections.abc import Iterable

from recurtext.errors import ConfigurationError
from recurtext.patterns.base import (
    CATEGORY_PRIORITY,
    HandlerContext,
    PatternCategory,
    PatternHandler,
    PatternMatch,
    PatternResult,
    create_handler,
)
from recurtext.patterns.combiner import PatternCombiner, merge_fields
from recurtext.patterns.count import COUNT_HANDLER
from recurtext.patterns.day_of_month import DAY_OF_MONTH_HANDLER
from recurtext.patterns.day_of_week import DAY_OF_WEEK_HANDLER
from recurtext.patterns.frequency import FREQUENCY_HANDLER
from recurtext.patterns.interval import INTERVAL_HANDLER
from recurtext.patterns.month import MONTH_HANDLER
from recurtext.patterns.time_of_day import TIME_OF_DAY_HANDLER
from recurtext.patterns.until_date import UNTIL_DATE_HANDLER

HANDLERS: tuple[PatternHandler, ...] = tuple(
    sorted(
        (
            INTERVAL_HANDLER,
            FREQUENCY_HANDLER,
            DAY_OF_WEEK_HANDLER,
            DAY_OF_MONTH_HANDLER,
            MONTH_HANDLER,
            COUNT_HANDLER,
            UNTIL_DATE_HANDLER,
            TIME_OF_DAY_HANDLER,
        ),
        key=lambda handler: handler.priority,
        reverse=True,
    )
)

HANDLER_NAMES: tuple[str, ...] = tuple(handler.name for handler in HANDLERS)


def get_handlers(names: Iterable[str] | None = None) -> tuple[PatternHandler, ...]:
    """Registered handlers restricted to *names*, highest priority first.

    Raises ConfigurationError for an empty selection or an unknown name.
    """
    if names is None:
        return HANDLERS
    selected = set(names)
    if not selected:
        raise ConfigurationError("At least one pattern handler must be enabled")
    unknown = sorted(selected.difference(HANDLER_NAMES))
    if unknown:
        raise ConfigurationError(f"Unknown pattern handlers: {', '.join(unknown)}")
    return tuple(handler for handler in HANDLERS if handler.name in selected)


__all__ = [
    "CATEGORY_PRIORITY",
    "HANDLERS",
    "HANDLER_NAMES",
    "HandlerContext",
    "PatternCategory",
    "PatternCombiner",
    "PatternHandler",
    "PatternMatch",
    "PatternResult",
    "create_handler",
    "get_handlers",
    "merge_fields",
]
