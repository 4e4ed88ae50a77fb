"""Recurrence descriptor → RRULE strings (RFC 5545) and English summaries."""

from __future__ import annotations

from recurtext.models import RecurrenceOptions

_BYDAY_TO_EN: dict[str, str] = {
    "MO": "Monday",
    "TU": "Tuesday",
    "WE": "Wednesday",
    "TH": "Thursday",
    "FR": "Friday",
    "SA": "Saturday",
    "SU": "Sunday",
}

_MONTH_TO_EN: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_FREQ_TO_EN: dict[str, tuple[str, str]] = {
    # (singular "every X", unit for intervals)
    "DAILY": ("every day", "day"),
    "WEEKLY": ("every week", "week"),
    "MONTHLY": ("every month", "month"),
    "YEARLY": ("every year", "year"),
}

_UNTIL_FORMAT = "%Y%m%dT%H%M%S"
_SUFFIXES: dict[int, str] = {1: "st", 2: "nd", 3: "rd"}


def _pluralize_interval(n: int, unit: str) -> str:
    """English pluralization: 1 week, 2 weeks."""
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def _ordinal(n: int) -> str:
    """1 → 1st, 22 → 22nd, -1 → last, -2 → 2nd to last."""
    if n == -1:
        return "last"
    if n < 0:
        return f"{_ordinal(-n)} to last"
    if n % 100 in (11, 12, 13):
        return f"{n}th"
    return f"{n}{_SUFFIXES.get(n % 10, 'th')}"


def _join(words: list[str]) -> str:
    if len(words) <= 1:
        return "".join(words)
    return ", ".join(words[:-1]) + f" and {words[-1]}"


def _csv(values: tuple[int, ...] | tuple[str, ...]) -> str:
    return ",".join(str(value) for value in values)


def build_rrule(options: RecurrenceOptions) -> str | None:
    """Convert a recurrence descriptor to an RRULE string.

    Returns None if the descriptor has no frequency.
    """
    if options.freq is None:
        return None

    parts = [f"FREQ={options.freq}"]
    if options.interval > 1:
        parts.append(f"INTERVAL={options.interval}")
    if options.byweekday:
        parts.append(f"BYDAY={_csv(options.byweekday)}")
    if options.bymonthday:
        parts.append(f"BYMONTHDAY={_csv(options.bymonthday)}")
    if options.bymonth:
        parts.append(f"BYMONTH={_csv(options.bymonth)}")
    if options.bysetpos:
        parts.append(f"BYSETPOS={_csv(options.bysetpos)}")
    if options.byhour:
        parts.append(f"BYHOUR={_csv(options.byhour)}")
    if options.byminute:
        parts.append(f"BYMINUTE={_csv(options.byminute)}")
    if options.count is not None:
        parts.append(f"COUNT={options.count}")
    if options.until is not None:
        parts.append(f"UNTIL={options.until.strftime(_UNTIL_FORMAT)}")

    return "RRULE:" + ";".join(parts)


def _describe_days(byday: str, bysetpos: str | None) -> str:
    if bysetpos is not None:
        positions = _join([_ordinal(int(pos)) for pos in bysetpos.split(",")])
        days = _join([_BYDAY_TO_EN.get(day, day) for day in byday.split(",")])
        return f"on the {positions} {days}"
    if byday == "MO,TU,WE,TH,FR":
        return "on weekdays"
    if byday == "SA,SU":
        return "on weekends"
    return "on " + _join([_BYDAY_TO_EN.get(day, day) for day in byday.split(",")])


def format_recurrence(rrule: str | None) -> str | None:
    """Convert an RRULE string to a human-readable English description.

    Returns None if rrule is None.
    """
    if rrule is None:
        return None

    # Parse RRULE components
    body = rrule.removeprefix("RRULE:")
    params: dict[str, str] = {}
    for part in body.split(";"):
        if "=" in part:
            key, val = part.split("=", 1)
            params[key] = val

    freq = params.get("FREQ")
    if freq not in _FREQ_TO_EN:
        return "repeats"

    singular, unit = _FREQ_TO_EN[freq]
    interval = int(params.get("INTERVAL", "1"))
    pieces = [f"every {_pluralize_interval(interval, unit)}" if interval > 1 else singular]

    if "BYDAY" in params:
        pieces.append(_describe_days(params["BYDAY"], params.get("BYSETPOS")))
    if "BYMONTHDAY" in params:
        days = [_ordinal(int(day)) for day in params["BYMONTHDAY"].split(",")]
        pieces.append(f"on the {_join(days)} day")
    if "BYMONTH" in params:
        months = [_MONTH_TO_EN[int(month) - 1] for month in params["BYMONTH"].split(",")]
        pieces.append(f"in {_join(months)}")
    if "BYHOUR" in params:
        minutes = params.get("BYMINUTE", "0").split(",")
        times = [
            f"{int(hour):02d}:{int(minute):02d}"
            for hour in params["BYHOUR"].split(",")
            for minute in minutes
        ]
        pieces.append(f"at {_join(times)}")
    if "COUNT" in params:
        pieces.append(f"for {_pluralize_interval(int(params['COUNT']), 'time')}")
    if "UNTIL" in params:
        until = params["UNTIL"]
        pieces.append(f"until {until[0:4]}-{until[4:6]}-{until[6:8]}")

    return " ".join(pieces)
