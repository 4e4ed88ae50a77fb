"""Tests for the pattern handlers and their registry."""

from datetime import date, datetime, time
from unittest.mock import MagicMock

import pytest

from recurtext.errors import ConfigurationError
from recurtext.models import WEEKDAYS, WEEKEND, Frequency, RecurrenceOptions, Weekday
from recurtext.nlp.document import TextDocument
from recurtext.patterns import HANDLER_NAMES, HandlerContext, PatternCategory, get_handlers
from recurtext.patterns.base import create_handler, find_end_clause, strip_end_clause
from recurtext.patterns.count import COUNT_HANDLER
from recurtext.patterns.day_of_month import DAY_OF_MONTH_HANDLER
from recurtext.patterns.day_of_week import DAY_OF_WEEK_HANDLER, expand_day_range
from recurtext.patterns.frequency import FREQUENCY_HANDLER
from recurtext.patterns.interval import INTERVAL_HANDLER
from recurtext.patterns.month import MONTH_HANDLER, expand_month_range
from recurtext.patterns.time_of_day import TIME_OF_DAY_HANDLER
from recurtext.patterns.until_date import UNRESOLVED_CONFIDENCE, UNTIL_DATE_HANDLER

ANCHOR = datetime(2026, 3, 1, 8, 0)


@pytest.fixture
def resolver() -> MagicMock:
    mock = MagicMock()
    mock.resolve.return_value = None
    return mock


@pytest.fixture
def context(resolver: MagicMock) -> HandlerContext:
    return HandlerContext(anchor=ANCHOR, date_resolver=resolver)


class TestRegistry:
    def test_priority_order(self) -> None:
        assert HANDLER_NAMES == (
            "interval",
            "frequency",
            "day_of_week",
            "day_of_month",
            "month",
            "count",
            "until_date",
            "time_of_day",
        )

    def test_all_by_default(self) -> None:
        assert [handler.name for handler in get_handlers()] == list(HANDLER_NAMES)

    def test_subset_keeps_priority_order(self) -> None:
        handlers = get_handlers(["count", "interval"])
        assert [handler.name for handler in handlers] == ["interval", "count"]

    def test_empty_selection(self) -> None:
        with pytest.raises(ConfigurationError, match="At least one"):
            get_handlers([])

    def test_unknown_name(self) -> None:
        with pytest.raises(ConfigurationError, match="bogus"):
            get_handlers(["interval", "bogus"])


class TestCreateHandler:
    def test_requires_name(self) -> None:
        with pytest.raises(ConfigurationError):
            create_handler(" ", PatternCategory.COUNT, 1, [lambda doc, ctx: None])

    def test_requires_matchers(self) -> None:
        with pytest.raises(ConfigurationError):
            create_handler("empty", PatternCategory.COUNT, 1, [])

    def test_requires_callable_processor(self) -> None:
        with pytest.raises(ConfigurationError):
            create_handler(
                "broken",
                PatternCategory.COUNT,
                1,
                [lambda doc, ctx: None],
                "not callable",  # type: ignore[arg-type]
            )

    def test_no_match(self, context: HandlerContext) -> None:
        handler = create_handler("never", PatternCategory.COUNT, 1, [lambda doc, ctx: None])
        assert handler.apply(TextDocument("daily"), context) is None


class TestEndClause:
    def test_strips_until(self) -> None:
        doc = strip_end_clause(TextDocument("every monday until december"))
        assert doc.text == "every monday"

    def test_range_is_not_end_clause(self) -> None:
        doc = TextDocument("monday through friday")
        assert find_end_clause(doc) is None
        assert strip_end_clause(doc) is doc

    def test_through_date(self) -> None:
        found = find_end_clause(TextDocument("daily through june 30"))
        assert found is not None
        assert found.group() == "through"

    def test_longest_term_wins(self) -> None:
        found = find_end_clause(TextDocument("weekly ending on friday"))
        assert found is not None
        assert found.group() == "ending on"


class TestIntervalHandler:
    """Tests for "every N units", "every other unit" and ordinal intervals."""

    @pytest.mark.parametrize(
        "text, freq, interval",
        [
            ("every 3 days", Frequency.DAILY, 3),
            ("every 2 weeks", Frequency.WEEKLY, 2),
            ("every two weeks", Frequency.WEEKLY, 2),
            ("every 6 months", Frequency.MONTHLY, 6),
            ("every 1 year", Frequency.YEARLY, 1),
            ("every other day", Frequency.DAILY, 2),
            ("every other month", Frequency.MONTHLY, 2),
        ],
    )
    def test_exact(
        self, context: HandlerContext, text: str, freq: Frequency, interval: int
    ) -> None:
        result = INTERVAL_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.freq is freq
        assert result.options.interval == interval
        assert result.set_fields == {"freq", "interval"}
        assert result.confidence == 1.0
        assert result.category is PatternCategory.INTERVAL

    @pytest.mark.parametrize(
        "text, freq, interval",
        [
            ("every other monday", Frequency.WEEKLY, 2),
            ("every other weekend", Frequency.WEEKLY, 2),
            ("every second month", Frequency.MONTHLY, 2),
            ("every 3rd week", Frequency.WEEKLY, 3),
            ("every third day", Frequency.DAILY, 3),
        ],
    )
    def test_implied(
        self, context: HandlerContext, text: str, freq: Frequency, interval: int
    ) -> None:
        result = INTERVAL_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.freq is freq
        assert result.options.interval == interval
        assert result.confidence == 0.95

    @pytest.mark.parametrize("text", ["every 0 days", "every monday", "daily", "twice"])
    def test_no_match(self, context: HandlerContext, text: str) -> None:
        assert INTERVAL_HANDLER.apply(TextDocument(text), context) is None

    def test_ignores_end_clause(self, context: HandlerContext) -> None:
        result = INTERVAL_HANDLER.apply(TextDocument("every 2 weeks until march"), context)
        assert result is not None
        assert result.matched_text == "every 2 weeks"


class TestFrequencyHandler:
    @pytest.mark.parametrize(
        "text, freq, confidence",
        [
            ("daily", Frequency.DAILY, 1.0),
            ("weekly", Frequency.WEEKLY, 1.0),
            ("monthly", Frequency.MONTHLY, 1.0),
            ("yearly", Frequency.YEARLY, 1.0),
            ("annually", Frequency.YEARLY, 1.0),
            ("every day", Frequency.DAILY, 0.95),
            ("every week", Frequency.WEEKLY, 0.95),
            ("every month", Frequency.MONTHLY, 0.95),
            ("every year", Frequency.YEARLY, 0.95),
        ],
    )
    def test_literals(
        self, context: HandlerContext, text: str, freq: Frequency, confidence: float
    ) -> None:
        result = FREQUENCY_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.freq is freq
        assert result.set_fields == {"freq"}
        assert result.confidence == confidence

    def test_every_weekday(self, context: HandlerContext) -> None:
        result = FREQUENCY_HANDLER.apply(TextDocument("every weekday"), context)
        assert result is not None
        assert result.options.freq is Frequency.WEEKLY
        assert result.options.byweekday == WEEKDAYS
        assert result.set_fields == {"freq", "byweekday"}

    def test_every_weekend(self, context: HandlerContext) -> None:
        result = FREQUENCY_HANDLER.apply(TextDocument("every weekend"), context)
        assert result is not None
        assert result.options.byweekday == WEEKEND

    @pytest.mark.parametrize("text", ["every monday", "every 2 weeks", "weekday"])
    def test_no_match(self, context: HandlerContext, text: str) -> None:
        assert FREQUENCY_HANDLER.apply(TextDocument(text), context) is None


class TestDayOfWeekHandler:
    """Tests for day names, ranges and groups."""

    def test_expand_range(self) -> None:
        assert expand_day_range(Weekday.MO, Weekday.FR) == WEEKDAYS
        assert expand_day_range(Weekday.FR, Weekday.MO) == (
            Weekday.FR,
            Weekday.SA,
            Weekday.SU,
            Weekday.MO,
        )
        assert expand_day_range(Weekday.WE, Weekday.WE) == (Weekday.WE,)

    def test_single_day_suggests_weekly(self, context: HandlerContext) -> None:
        result = DAY_OF_WEEK_HANDLER.apply(TextDocument("every monday"), context)
        assert result is not None
        assert result.options.byweekday == (Weekday.MO,)
        assert result.options.freq is Frequency.WEEKLY
        assert result.set_fields == {"byweekday"}
        assert result.confidence == 1.0

    def test_bare_day_lower_confidence(self, context: HandlerContext) -> None:
        result = DAY_OF_WEEK_HANDLER.apply(TextDocument("friday"), context)
        assert result is not None
        assert result.options.byweekday == (Weekday.FR,)
        assert result.confidence == 0.9

    @pytest.mark.parametrize(
        "text, days",
        [
            ("monday and friday", (Weekday.MO, Weekday.FR)),
            ("tue and thu", (Weekday.TU, Weekday.TH)),
            ("on mondays", (Weekday.MO,)),
            ("monday through friday", WEEKDAYS),
            ("mon to wed", (Weekday.MO, Weekday.TU, Weekday.WE)),
            ("friday to monday", (Weekday.MO, Weekday.FR, Weekday.SA, Weekday.SU)),
            ("weekends", WEEKEND),
            ("weekday", WEEKDAYS),
            ("saturday and sunday", WEEKEND),
            ("weekend and monday", (Weekday.MO, Weekday.SA, Weekday.SU)),
        ],
    )
    def test_day_sets(self, context: HandlerContext, text: str, days: tuple[Weekday, ...]) -> None:
        result = DAY_OF_WEEK_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.byweekday == days

    @pytest.mark.parametrize("text", ["every 3 days", "monthly", "the 15th", "in march"])
    def test_no_match(self, context: HandlerContext, text: str) -> None:
        assert DAY_OF_WEEK_HANDLER.apply(TextDocument(text), context) is None


class TestDayOfMonthHandler:
    """Tests for days of the month and weekday positions."""

    def test_numeric_day_suggests_monthly(self, context: HandlerContext) -> None:
        result = DAY_OF_MONTH_HANDLER.apply(TextDocument("the 15th"), context)
        assert result is not None
        assert result.options.bymonthday == (15,)
        assert result.options.freq is Frequency.MONTHLY
        assert result.set_fields == {"bymonthday"}
        assert result.confidence == 0.95
        assert result.category is PatternCategory.DAY_OF_MONTH

    def test_month_reference_claims_monthly(self, context: HandlerContext) -> None:
        doc = TextDocument("the 1st and 15th of every month")
        result = DAY_OF_MONTH_HANDLER.apply(doc, context)
        assert result is not None
        assert result.options.bymonthday == (1, 15)
        assert result.set_fields == {"freq", "bymonthday"}

    def test_first_and_last_day(self, context: HandlerContext) -> None:
        doc = TextDocument("first and last day of the month")
        result = DAY_OF_MONTH_HANDLER.apply(doc, context)
        assert result is not None
        assert result.options.bymonthday == (1, -1)
        assert result.options.freq is Frequency.MONTHLY
        assert "freq" in result.set_fields

    @pytest.mark.parametrize(
        "text, days",
        [
            ("day 15", (15,)),
            ("on the 3", (3,)),
            ("the twenty-first", (21,)),
            ("the 2nd and 22nd", (2, 22)),
            ("end of the month", (-1,)),
            ("beginning and end of month", (1, -1)),
            ("on march 15", (15,)),
        ],
    )
    def test_day_forms(self, context: HandlerContext, text: str, days: tuple[int, ...]) -> None:
        result = DAY_OF_MONTH_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.bymonthday == days

    def test_out_of_range_day_warns(self, context: HandlerContext) -> None:
        result = DAY_OF_MONTH_HANDLER.apply(TextDocument("the 32nd and the 3rd"), context)
        assert result is not None
        assert result.options.bymonthday == (3,)
        assert result.warnings == ("Ignored out-of-range day of month 32",)

    def test_weekday_position(self, context: HandlerContext) -> None:
        result = DAY_OF_MONTH_HANDLER.apply(
            TextDocument("the second monday of the month"), context
        )
        assert result is not None
        assert result.category is PatternCategory.POSITION
        assert result.options.byweekday == (Weekday.MO,)
        assert result.options.bysetpos == (2,)
        assert result.options.freq is Frequency.MONTHLY
        assert result.set_fields == {"freq", "byweekday", "bysetpos"}

    def test_several_positions(self, context: HandlerContext) -> None:
        result = DAY_OF_MONTH_HANDLER.apply(TextDocument("first and third tuesday"), context)
        assert result is not None
        assert result.options.bysetpos == (1, 3)
        assert result.set_fields == {"byweekday", "bysetpos"}

    def test_last_weekday(self, context: HandlerContext) -> None:
        result = DAY_OF_MONTH_HANDLER.apply(TextDocument("last friday"), context)
        assert result is not None
        assert result.options.byweekday == (Weekday.FR,)
        assert result.options.bysetpos == (-1,)

    @pytest.mark.parametrize(
        "text",
        ["every second day", "every 2nd week", "every third month", "every monday", "daily"],
    )
    def test_no_match(self, context: HandlerContext, text: str) -> None:
        assert DAY_OF_MONTH_HANDLER.apply(TextDocument(text), context) is None


class TestMonthHandler:
    def test_expand_range(self) -> None:
        assert expand_month_range(1, 3) == (1, 2, 3)
        assert expand_month_range(11, 2) == (11, 12, 1, 2)

    def test_single_month(self, context: HandlerContext) -> None:
        result = MONTH_HANDLER.apply(TextDocument("in january"), context)
        assert result is not None
        assert result.options.bymonth == (1,)
        assert result.options.freq is Frequency.YEARLY
        assert result.set_fields == {"bymonth"}
        assert result.confidence == 0.9

    @pytest.mark.parametrize(
        "text, months",
        [
            ("every march or june", (3, 6)),
            ("during jan, feb", (1, 2)),
            ("january through march", (1, 2, 3)),
            ("november to february", (1, 2, 11, 12)),
            ("every year on march 15th", (3,)),
            ("aug 1", (8,)),
        ],
    )
    def test_month_sets(self, context: HandlerContext, text: str, months: tuple[int, ...]) -> None:
        result = MONTH_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.bymonth == months

    @pytest.mark.parametrize(
        "text", ["may", "every monday", "until december", "until december 31", "march 2027"]
    )
    def test_no_match(self, context: HandlerContext, text: str) -> None:
        assert MONTH_HANDLER.apply(TextDocument(text), context) is None


class TestCountHandler:
    @pytest.mark.parametrize(
        "text, count",
        [
            ("for 10 times", 10),
            ("5 occurrences", 5),
            ("for three times", 3),
        ],
    )
    def test_count(self, context: HandlerContext, text: str, count: int) -> None:
        result = COUNT_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.count == count
        assert result.set_fields == {"count"}
        assert result.is_partial

    def test_zero(self, context: HandlerContext) -> None:
        assert COUNT_HANDLER.apply(TextDocument("0 times"), context) is None


class TestTimeOfDayHandler:
    @pytest.mark.parametrize(
        "text, hour, minute",
        [
            ("at 9am", 9, 0),
            ("at 9 am", 9, 0),
            ("at 2:30 pm", 14, 30),
            ("at 14:30", 14, 30),
            ("at 12am", 0, 0),
            ("at 12pm", 12, 0),
            ("at 7 p.m.", 19, 0),
            ("at noon", 12, 0),
            ("at midnight", 0, 0),
        ],
    )
    def test_times(self, context: HandlerContext, text: str, hour: int, minute: int) -> None:
        result = TIME_OF_DAY_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.byhour == (hour,)
        assert result.options.byminute == (minute,)
        assert result.set_fields == {"byhour", "byminute"}

    def test_invalid_time_warns(self, context: HandlerContext) -> None:
        result = TIME_OF_DAY_HANDLER.apply(TextDocument("at 25:00 and at 8am"), context)
        assert result is not None
        assert result.options.byhour == (8,)
        assert result.warnings == ("Ignored invalid time '25:00'",)

    @pytest.mark.parametrize(
        "text, hours",
        [
            ("at 9am and 5pm", (9, 17)),
            ("at 8:00 and at noon", (8, 12)),
            ("at 7, 12 and 19", (7, 12, 19)),
        ],
    )
    def test_time_lists(
        self, context: HandlerContext, text: str, hours: tuple[int, ...]
    ) -> None:
        result = TIME_OF_DAY_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options.byhour == hours
        assert result.options.byminute == (0,)
        assert result.matched_text == text

    def test_count_after_time(self, context: HandlerContext) -> None:
        result = TIME_OF_DAY_HANDLER.apply(TextDocument("at 9 and 5 times"), context)
        assert result is not None
        assert result.options.byhour == (9,)

    def test_no_match(self, context: HandlerContext) -> None:
        assert TIME_OF_DAY_HANDLER.apply(TextDocument("every monday"), context) is None


class TestUntilDateHandler:
    """Tests for end-date clauses."""

    def test_resolved_by_resolver(self, context: HandlerContext, resolver: MagicMock) -> None:
        resolver.resolve.return_value = date(2026, 12, 31)
        result = UNTIL_DATE_HANDLER.apply(TextDocument("friday until december 31"), context)
        assert result is not None
        assert result.options.until == datetime.combine(date(2026, 12, 31), time.max)
        assert result.set_fields == {"until"}
        assert result.matched_text == "until december 31"
        assert result.confidence == 0.9
        assert result.is_partial
        resolver.resolve.assert_called_once_with("december 31", anchor=ANCHOR)

    def test_numeric_fallback(self, context: HandlerContext) -> None:
        result = UNTIL_DATE_HANDLER.apply(TextDocument("ending on 12/31/2026"), context)
        assert result is not None
        assert result.options.until == datetime.combine(date(2026, 12, 31), time.max)
        assert result.confidence == 0.8

    def test_datetime_from_resolver(self, context: HandlerContext, resolver: MagicMock) -> None:
        resolver.resolve.return_value = datetime(2026, 6, 30, 15, 0)
        result = UNTIL_DATE_HANDLER.apply(TextDocument("till june 30"), context)
        assert result is not None
        assert result.options.until == datetime.combine(date(2026, 6, 30), time.max)

    def test_past_date_warns(self, context: HandlerContext, resolver: MagicMock) -> None:
        resolver.resolve.return_value = date(2025, 1, 1)
        result = UNTIL_DATE_HANDLER.apply(TextDocument("until january 1 2025"), context)
        assert result is not None
        assert result.warnings == ("End date 2025-01-01 is before the start date",)

    def test_range_is_not_end_date(self, context: HandlerContext, resolver: MagicMock) -> None:
        assert UNTIL_DATE_HANDLER.apply(TextDocument("monday through friday"), context) is None
        resolver.resolve.assert_not_called()

    def test_missing_expression(self, context: HandlerContext, resolver: MagicMock) -> None:
        result = UNTIL_DATE_HANDLER.apply(TextDocument("weekly until"), context)
        assert result is not None
        assert result.set_fields == frozenset()
        assert result.warnings == ("Missing end date after 'until'",)
        resolver.resolve.assert_not_called()

    @pytest.mark.parametrize("text", ["until whenever", "until 2026-02-30"])
    def test_unresolvable(self, context: HandlerContext, text: str) -> None:
        result = UNTIL_DATE_HANDLER.apply(TextDocument(text), context)
        assert result is not None
        assert result.options == RecurrenceOptions()
        assert result.set_fields == frozenset()
        assert result.confidence == UNRESOLVED_CONFIDENCE
        assert result.matched_text == text
        assert result.warnings == (f"Could not resolve end date {text[6:]!r}",)
