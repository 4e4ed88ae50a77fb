"""Resolve free-text date expressions ("december 15th", "next month", "12/31/2026")."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Protocol

import dateparser

logger = logging.getLogger(__name__)


class DateResolver(Protocol):
    def resolve(self, text: str, *, anchor: datetime) -> date | None: ...


class DateparserResolver:
    """Resolve dates with :mod:`dateparser`.

    Dates are read month-first and in the future relative to *anchor*;
    a month without a day resolves to the last day of that month.
    """

    def __init__(self, languages: Sequence[str] = ("en",)) -> None:
        self.languages = list(languages)

    def resolve(self, text: str, *, anchor: datetime) -> date | None:
        parsed = dateparser.parse(
            text,
            languages=self.languages,
            settings={
                "PREFER_DATES_FROM": "future",
                "PREFER_DAY_OF_MONTH": "last",
                "DATE_ORDER": "MDY",
                "RELATIVE_BASE": anchor.replace(tzinfo=None),
                "RETURN_AS_TIMEZONE_AWARE": False,
            },
        )
        if parsed is None:
            logger.debug("dateparser could not resolve %r", text)
            return None
        return parsed.date()


_ISO_RE = re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b")
_NUMERIC_RE = re.compile(r"\b(\d{1,2})[/.-](\d{1,2})(?:[/.-](\d{2}|\d{4}))?\b")


def _full_year(text: str) -> int:
    year = int(text)
    return year + 2000 if year < 100 else year


def parse_numeric_date(text: str, *, anchor: date) -> date | None:
    """Parse a numeric date: ISO ``Y-M-D`` first, then ``M/D/Y``, then ``D/M/Y``.

    Without a year the next occurrence on or after *anchor* is used.
    Returns ``None`` when nothing valid is found.
    """
    iso = _ISO_RE.search(text)
    if iso is not None:
        try:
            return date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))
        except ValueError:
            return None

    match = _NUMERIC_RE.search(text)
    if match is None:
        return None

    first, second = int(match.group(1)), int(match.group(2))
    year = _full_year(match.group(3)) if match.group(3) else anchor.year
    for month, day in ((first, second), (second, first)):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if match.group(3) is None and candidate < anchor:
            try:
                candidate = candidate.replace(year=year + 1)
            except ValueError:
                continue
        return candidate
    return None
