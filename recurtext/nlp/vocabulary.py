"""Word lists and lookup tables shared by the normalizer, splitter and handlers."""

from __future__ import annotations

import re
from collections.abc import Iterable

from recurtext.models import Frequency, Weekday

DAY_NAMES: dict[str, Weekday] = {
    "monday": Weekday.MO,
    "tuesday": Weekday.TU,
    "wednesday": Weekday.WE,
    "thursday": Weekday.TH,
    "friday": Weekday.FR,
    "saturday": Weekday.SA,
    "sunday": Weekday.SU,
}

DAY_ABBREVIATIONS: dict[str, Weekday] = {
    "mon": Weekday.MO,
    "tue": Weekday.TU,
    "tues": Weekday.TU,
    "wed": Weekday.WE,
    "weds": Weekday.WE,
    "thu": Weekday.TH,
    "thur": Weekday.TH,
    "thurs": Weekday.TH,
    "fri": Weekday.FR,
    "sat": Weekday.SA,
    "sun": Weekday.SU,
}

MONTH_NAMES: dict[str, int] = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

MONTH_ABBREVIATIONS: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Mapping: time unit → frequency it implies
UNIT_FREQUENCIES: dict[str, Frequency] = {
    "day": Frequency.DAILY,
    "week": Frequency.WEEKLY,
    "month": Frequency.MONTHLY,
    "year": Frequency.YEARLY,
}

NUMBER_WORDS: dict[str, int] = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}

# "last" counts from the end of the month
ORDINAL_WORDS: dict[str, int] = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
    "eleventh": 11,
    "twelfth": 12,
    "thirteenth": 13,
    "fourteenth": 14,
    "fifteenth": 15,
    "sixteenth": 16,
    "seventeenth": 17,
    "eighteenth": 18,
    "nineteenth": 19,
    "twentieth": 20,
    "twenty-first": 21,
    "twenty-second": 22,
    "twenty-third": 23,
    "twenty-fourth": 24,
    "twenty-fifth": 25,
    "twenty-sixth": 26,
    "twenty-seventh": 27,
    "twenty-eighth": 28,
    "twenty-ninth": 29,
    "thirtieth": 30,
    "thirty-first": 31,
    "last": -1,
}

# Explicit misspellings and variants, checked before fuzzy correction
DAY_NAME_VARIANTS: dict[str, str] = {
    "mondays": "monday",
    "mondey": "monday",
    "mondy": "monday",
    "tuesdays": "tuesday",
    "tues": "tuesday",
    "tusday": "tuesday",
    "tuseday": "tuesday",
    "wednesdays": "wednesday",
    "weds": "wednesday",
    "wednes": "wednesday",
    "wedness": "wednesday",
    "wendsday": "wednesday",
    "thursdays": "thursday",
    "thurs": "thursday",
    "thur": "thursday",
    "thrusday": "thursday",
    "fridays": "friday",
    "friady": "friday",
    "fridy": "friday",
    "saturdays": "saturday",
    "sat": "saturday",
    "satur": "saturday",
    "saterday": "saturday",
    "sundays": "sunday",
    "sun": "sunday",
    "suday": "sunday",
}

MONTH_NAME_VARIANTS: dict[str, str] = {
    "jan": "january",
    "janurary": "january",
    "janaury": "january",
    "feb": "february",
    "feburary": "february",
    "febuary": "february",
    "mar": "march",
    "apr": "april",
    "jun": "june",
    "jul": "july",
    "aug": "august",
    "agust": "august",
    "sep": "september",
    "sept": "september",
    "septmber": "september",
    "oct": "october",
    "octobr": "october",
    "nov": "november",
    "novmber": "november",
    "dec": "december",
    "decmber": "december",
}

# Everyday words and names within fuzzy reach of a day or month name
LOOKALIKE_WORDS: frozenset[str] = frozenset(
    {"jane", "junk", "jury", "marc", "marco", "mark", "mary", "mayo", "sundae"}
)

# Canonical outputs never contain a key, so substitution is idempotent
TERM_SYNONYMS: dict[str, str] = {
    "everyday": "daily",
    "each day": "daily",
    "once a day": "daily",
    "once daily": "daily",
    "each week": "weekly",
    "once a week": "weekly",
    "once weekly": "weekly",
    "each month": "monthly",
    "once a month": "monthly",
    "once monthly": "monthly",
    "each year": "yearly",
    "once a year": "yearly",
    "once yearly": "yearly",
    "annual": "yearly",
    "annually": "yearly",
    "all": "every",
    "each": "every",
    "any": "every",
    "work day": "weekday",
    "work days": "weekday",
    "workday": "weekday",
    "workdays": "weekday",
    "business day": "weekday",
    "business days": "weekday",
    "week day": "weekday",
    "week days": "weekday",
    "weekdays": "weekday",
    "week end": "weekend",
    "week ends": "weekend",
    "weekends": "weekend",
    "alternate": "other",
    "alternating": "other",
    "bi-weekly": "every 2 weeks",
    "biweekly": "every 2 weeks",
    "fortnightly": "every 2 weeks",
    "bi-monthly": "every 2 months",
    "bimonthly": "every 2 months",
    "quarterly": "every 3 months",
    "bi-annual": "every 6 months",
    "biannual": "every 6 months",
    "semi-annual": "every 6 months",
    "semiannual": "every 6 months",
}

# Idiomatic phrases that must survive conjunction splitting intact
PROTECTED_PHRASES: tuple[str, ...] = (
    "first and last",
    "first and third",
    "second and fourth",
    "first and third and last",
    "second and fourth and last",
    "1st and last",
    "2nd and 4th",
    "1st and 3rd",
    "3rd and last",
    "1st and 15th",
    "first and 15th",
    "1st and third",
    "first and 3rd",
    "monday through friday",
    "monday to friday",
    "monday thru friday",
    "saturday and sunday",
    "every other weekend",
    "january through march",
    "april to june",
    "july thru september",
    "morning and evening",
    "morning and night",
    "every other day",
    "every other week",
    "first and last day of the month",
    "beginning and end of month",
)

# Longest first so "ending on" wins over "ending"
END_DATE_TERMS: tuple[str, ...] = (
    "no later than",
    "up until",
    "ending on",
    "ends on",
    "end on",
    "ending",
    "through",
    "until",
    "up to",
    "thru",
    "till",
)

# Range connectors; "through" doubles as an end-date term
RANGE_TERMS: tuple[str, ...] = ("through", "thru", "to")

CONJUNCTIONS: tuple[str, ...] = ("and", "plus", "also")


def alternation(words: Iterable[str]) -> str:
    """Regex alternation over *words*, longest first.

    Spaces and hyphens inside a word match any run of either.
    """
    ordered = sorted(set(words), key=len, reverse=True)
    return "|".join(
        r"[\s-]+".join(re.escape(part) for part in re.split(r"[\s-]+", word)) for word in ordered
    )


DAY_WORD = alternation([*DAY_NAMES, *DAY_ABBREVIATIONS])
MONTH_WORD = alternation([*MONTH_NAMES, *MONTH_ABBREVIATIONS])
ORDINAL_WORD = alternation(ORDINAL_WORDS)
NUMERIC_ORDINAL = r"\d{1,2}(?:st|nd|rd|th)"
# "9am", "2:30 p.m.", "14:30", "noon"; a bare number followed by "times" is a count
CLOCK_TIME = (
    r"(?:\d{1,2}(?::\d{2})?(?:\s*[ap]\.?m\.?)?(?!\w|\s+times?\b)|(?:noon|midday|midnight)\b)"
)


def day_from_word(word: str) -> Weekday | None:
    """Weekday for a full, abbreviated or plural day name."""
    key = word.lower()
    found = DAY_NAMES.get(key) or DAY_ABBREVIATIONS.get(key)
    if found is None and key.endswith("s"):
        found = DAY_NAMES.get(key[:-1])
    return found


def month_from_word(word: str) -> int | None:
    key = word.lower()
    return MONTH_NAMES.get(key) or MONTH_ABBREVIATIONS.get(key)


def ordinal_value(word: str) -> int | None:
    """Numeric value of "first", "twenty first", "last" or "15th"."""
    key = re.sub(r"\s+", "-", word.lower().strip())
    if key in ORDINAL_WORDS:
        return ORDINAL_WORDS[key]
    match = re.fullmatch(r"(\d{1,2})(?:st|nd|rd|th)?", key)
    return int(match.group(1)) if match else None


def number_value(word: str) -> int | None:
    key = word.lower()
    if key.isdigit():
        return int(key)
    return NUMBER_WORDS.get(key)
