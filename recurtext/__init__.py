"""Natural-language recurrence phrases → structured recurrence rules."""

from recurtext.cache import ResultCache
from recurtext.config import ParserSettings
from recurtext.errors import (
    ConfigurationError,
    PatternCombinationError,
    PropertyConflictError,
    RecurtextError,
)
from recurtext.models import Frequency, ParseResult, RecurrenceOptions, Weekday
from recurtext.parser import RecurrenceParser, parse_recurrence
from recurtext.rrule import build_rrule, format_recurrence

__all__ = [
    "ConfigurationError",
    "Frequency",
    "ParseResult",
    "ParserSettings",
    "PatternCombinationError",
    "PropertyConflictError",
    "RecurrenceOptions",
    "RecurrenceParser",
    "RecurtextError",
    "ResultCache",
    "Weekday",
    "build_rrule",
    "format_recurrence",
    "parse_recurrence",
]
