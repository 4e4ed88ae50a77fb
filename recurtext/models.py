"""Pydantic models for recurrence descriptors and parse results."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_serializer, field_validator


class Frequency(StrEnum):
    """Recurrence frequency, named as in RFC 5545."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Weekday(StrEnum):
    """Two-letter weekday tags, Monday first."""

    MO = "MO"
    TU = "TU"
    WE = "WE"
    TH = "TH"
    FR = "FR"
    SA = "SA"
    SU = "SU"

    @property
    def index(self) -> int:
        return _WEEKDAY_ORDER.index(self)


_WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)

WEEKDAYS: tuple[Weekday, ...] = _WEEKDAY_ORDER[:5]
WEEKEND: tuple[Weekday, ...] = _WEEKDAY_ORDER[5:]

# Fields holding sets of values; unioned when fragments merge
SET_FIELDS: tuple[str, ...] = (
    "byweekday",
    "bymonthday",
    "bymonth",
    "byhour",
    "byminute",
    "bysetpos",
)


def _signed_order(value: int) -> tuple[bool, int]:
    # 1, 15, 31 first, then -1, -2 (counted from the end)
    return (value < 0, abs(value))


def _checked(
    values: Iterable[int], name: str, low: int, high: int, *, signed: bool
) -> tuple[int, ...]:
    unique = tuple(dict.fromkeys(values))
    for value in unique:
        magnitude = abs(value) if signed else value
        if not low <= magnitude <= high:
            raise ValueError(f"{name} value out of range: {value}")
    return tuple(sorted(unique, key=_signed_order if signed else None))


class RecurrenceOptions(BaseModel):
    """Structured recurrence descriptor.

    Set-valued fields are stored as sorted, duplicate-free tuples so two
    descriptors built from the same days in different order compare equal.
    ``None`` means the field was never set.
    """

    freq: Frequency | None = None
    interval: int = Field(default=1, ge=1)
    byweekday: tuple[Weekday, ...] | None = None
    bymonthday: tuple[int, ...] | None = None
    bymonth: tuple[int, ...] | None = None
    byhour: tuple[int, ...] | None = None
    byminute: tuple[int, ...] | None = None
    bysetpos: tuple[int, ...] | None = None
    until: datetime | None = None
    count: int | None = Field(default=None, ge=1)

    model_config = {"frozen": True}

    @field_validator("byweekday")
    @classmethod
    def _order_weekdays(cls, value: tuple[Weekday, ...] | None) -> tuple[Weekday, ...] | None:
        if not value:
            return None
        return tuple(sorted(dict.fromkeys(value), key=lambda day: day.index))

    @field_validator("bymonthday")
    @classmethod
    def _check_monthdays(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        return _checked(value, "bymonthday", 1, 31, signed=True) if value else None

    @field_validator("bymonth")
    @classmethod
    def _check_months(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        return _checked(value, "bymonth", 1, 12, signed=False) if value else None

    @field_validator("byhour")
    @classmethod
    def _check_hours(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        return _checked(value, "byhour", 0, 23, signed=False) if value else None

    @field_validator("byminute")
    @classmethod
    def _check_minutes(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        return _checked(value, "byminute", 0, 59, signed=False) if value else None

    @field_validator("bysetpos")
    @classmethod
    def _check_setpos(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        return _checked(value, "bysetpos", 1, 366, signed=True) if value else None

    @field_serializer("until", when_used="json")
    @classmethod
    def serialize_until(cls, value: datetime | None) -> str | None:
        """Format the end date as ISO 8601 without microseconds."""
        if value is None:
            return None
        return value.replace(microsecond=0).isoformat()


class ParseResult(BaseModel):
    """Outcome of one parse call.

    ``options`` is ``None`` when no pattern matched; ``confidence`` is then 0.
    """

    options: RecurrenceOptions | None = None
    matched_patterns: tuple[str, ...] = ()
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    warnings: tuple[str, ...] = ()
    normalized_text: str = ""

    model_config = {"frozen": True}

    @property
    def matched(self) -> bool:
        return self.options is not None

    def to_rrule(self) -> str | None:
        """Render the descriptor as an RRULE line, or ``None`` without a match."""
        from recurtext.rrule import build_rrule

        if self.options is None:
            return None
        return build_rrule(self.options)
