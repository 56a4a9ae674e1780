# tests/test_arithmetic.py

import random
from datetime import date, timedelta

import pytest

from worldcal.core.errors import InvalidDateError
from worldcal.core.leap import CustomLeapRule, GregorianLeapRule
from worldcal.core.types import (
    CalendarDate, CalendarDefinition, IntercalaryRule, Month, TimeOfDay, Weekday, YearConfig,
)
from worldcal.engines.arithmetic import ArithmeticCore
from worldcal.engines.specs import DARK_SUN, GREGORIAN, WARHAMMER


@pytest.fixture
def greg():
    return ArithmeticCore(GREGORIAN)


@pytest.fixture
def mitterfruhl():
    """Three months of 30/33/33 days, a 4-day week and one day outside the week after month 2."""
    cal = CalendarDefinition(
        id="mini",
        months=(Month("First", 30), Month("Second", 33), Month("Third", 33)),
        weekdays=tuple(Weekday(n) for n in ("A", "B", "C", "D")),
        intercalary=(IntercalaryRule("Mitterfruhl", "Second", counts_for_weekdays=False),),
    )
    return ArithmeticCore(cal)


@pytest.fixture
def leapday():
    """A leap-only intercalary day after month 1, every 4th year."""
    cal = CalendarDefinition(
        id="leapday",
        months=(Month("One", 30), Month("Two", 30)),
        weekdays=tuple(Weekday(n) for n in ("X", "Y", "Z")),
        leap_year=CustomLeapRule(interval=4),
        intercalary=(IntercalaryRule("Leapday", "One", leap_year_only=True),),
    )
    return ArithmeticCore(cal)


def _to_python_date(d: CalendarDate) -> date:
    return date(d.year, d.month, d.day)


# ---------------------------------------------------------
# Gregorian-like fixture
# ---------------------------------------------------------

def test_gregorian_epoch_day(greg):
    d = greg.day_count_to_date(0)
    assert (d.year, d.month, d.day, d.weekday) == (2024, 1, 1, 1)
    assert greg.day_count_to_date(1) == CalendarDate(2024, 1, 2)


def test_gregorian_leap_day_round_trip(greg):
    d = CalendarDate(2024, 2, 29)
    n = greg.date_to_day_count(d)
    assert greg.day_count_to_date(n) == d


def test_gregorian_no_feb_29_in_common_year(greg):
    d = greg.add_days(CalendarDate(2025, 2, 28), 1)
    assert (d.month, d.day) == (3, 1)
    with pytest.raises(InvalidDateError):
        greg.date_to_day_count(CalendarDate(2025, 2, 29))


def test_gregorian_matches_python_dates(greg):
    """Dates and weekdays agree with the proleptic Gregorian calendar in datetime."""
    random.seed(42)
    base = date(2024, 1, 1)
    for _ in range(2000):
        n = random.randint(-700000, 700000)
        d = greg.day_count_to_date(n)
        expected = base + timedelta(days=n)
        assert _to_python_date(d) == expected
        # Sunday = 0 in the fixture, isoweekday has Sunday = 7
        assert d.weekday == expected.isoweekday() % 7


def test_gregorian_known_weekdays(greg):
    assert greg.calculate_weekday(2024, 7, 4) == 4      # Thursday
    assert greg.calculate_weekday(2000, 1, 1) == 6      # Saturday
    assert greg.calculate_weekday(1970, 1, 1) == 4      # Thursday


def test_gregorian_year_structure(greg):
    assert greg.get_year_length(2024) == 366
    assert greg.get_year_length(1900) == 365
    assert greg.get_month_lengths(2024)[1] == 29
    assert greg.get_month_lengths(2023)[1] == 28
    assert greg.days_between_years(2024, 2025) == 366
    assert greg.days_between_years(2025, 2024) == -366
    assert greg.days_between_years(1, 2001) == sum(greg.get_year_length(y) for y in range(1, 2001))


# ---------------------------------------------------------
# Intercalary fixture
# ---------------------------------------------------------

def test_step_into_and_out_of_intercalary(mitterfruhl):
    last = CalendarDate(0, 2, 33)

    into = mitterfruhl.add_days(last, 1)
    assert into.intercalary == "Mitterfruhl"
    assert (into.year, into.month, into.day) == (0, 2, 1)

    out = mitterfruhl.add_days(last, 2)
    assert out == CalendarDate(0, 3, 1)
    assert out.intercalary is None


def test_weekday_skips_non_counting_day(mitterfruhl):
    before = mitterfruhl.calculate_weekday(0, 2, 33)
    after = mitterfruhl.calculate_weekday(0, 3, 1)
    assert after == (before + 1) % 4
    # the day itself reports the weekday of the next regular day
    assert mitterfruhl.calculate_weekday(0, 2, 1, "Mitterfruhl") == after


def test_intercalary_never_out_of_range_day(mitterfruhl):
    for n in range(-500, 500):
        d = mitterfruhl.day_count_to_date(n)
        if d.intercalary is None:
            assert 1 <= d.day <= mitterfruhl.get_month_length(d.month, d.year)
        else:
            assert d.day == 1 and d.month == 2
        assert mitterfruhl.date_to_day_count(d) == n


def test_year_lengths_include_intercalary(mitterfruhl):
    assert mitterfruhl.get_year_length(0) == 97
    assert mitterfruhl.get_year_weekday_days(0) == 96
    assert mitterfruhl.get_month_lengths(0) == (30, 33, 33)
    assert mitterfruhl.day_of_year(CalendarDate(0, 3, 1)) == 65


def test_invalid_intercalary_name(mitterfruhl):
    with pytest.raises(InvalidDateError):
        mitterfruhl.date_to_day_count(CalendarDate(0, 1, 1, intercalary="Mitterfruhl"))
    with pytest.raises(InvalidDateError):
        mitterfruhl.date_to_day_count(CalendarDate(0, 2, 2, intercalary="Mitterfruhl"))


def test_leap_only_intercalary(leapday):
    assert leapday.get_year_length(4) == 61
    assert leapday.get_year_length(5) == 60
    assert [r.name for r in leapday.get_intercalary_days(8)] == ["Leapday"]
    assert leapday.get_intercalary_days(9) == ()
    with pytest.raises(InvalidDateError):
        leapday.date_to_day_count(CalendarDate(5, 1, 1, intercalary="Leapday"))


def test_counting_intercalary_advances_weekday(leapday):
    before = leapday.calculate_weekday(4, 1, 30)
    inside = leapday.calculate_weekday(4, 1, 1, "Leapday")
    after = leapday.calculate_weekday(4, 2, 1)
    assert inside == (before + 1) % 3
    assert after == (before + 2) % 3


# ---------------------------------------------------------
# Month / year arithmetic
# ---------------------------------------------------------

def test_add_months_clamps_and_carries(greg):
    assert greg.add_months(CalendarDate(2024, 1, 31), 1) == CalendarDate(2024, 2, 29)
    assert greg.add_months(CalendarDate(2023, 1, 31), 1) == CalendarDate(2023, 2, 28)
    assert greg.add_months(CalendarDate(2024, 12, 15), 1) == CalendarDate(2025, 1, 15)
    assert greg.add_months(CalendarDate(2024, 1, 15), -1) == CalendarDate(2023, 12, 15)
    assert greg.add_months(CalendarDate(2024, 3, 1), 25) == CalendarDate(2026, 4, 1)


def test_add_months_weekday_filled(greg):
    d = greg.add_months(CalendarDate(2024, 1, 4), 6)
    assert d == CalendarDate(2024, 7, 4)
    assert d.weekday == 4


def test_add_years_clamps_leap_day(greg):
    assert greg.add_years(CalendarDate(2024, 2, 29), 1) == CalendarDate(2025, 2, 28)
    assert greg.add_years(CalendarDate(2024, 2, 29), 4) == CalendarDate(2028, 2, 29)


def test_month_arithmetic_from_intercalary(mitterfruhl, leapday):
    d = CalendarDate(0, 2, 1, intercalary="Mitterfruhl")
    assert mitterfruhl.add_months(d, 1) == CalendarDate(0, 3, 33)
    assert mitterfruhl.add_years(d, 3) == CalendarDate(3, 2, 1, intercalary="Mitterfruhl")

    leap = CalendarDate(4, 1, 1, intercalary="Leapday")
    assert leapday.add_years(leap, 4) == CalendarDate(8, 1, 1, intercalary="Leapday")
    assert leapday.add_years(leap, 1) == CalendarDate(5, 1, 30)


def test_add_days_preserves_time(greg):
    d = CalendarDate(2024, 1, 1, time=TimeOfDay(13, 5, 0))
    out = greg.add_days(d, 40)
    assert out.time == TimeOfDay(13, 5, 0)
    assert (out.month, out.day) == (2, 10)


def test_month_out_of_range_fails_fast(greg):
    with pytest.raises(InvalidDateError):
        greg.get_month_length(13, 2024)
    with pytest.raises(InvalidDateError):
        greg.calculate_weekday(2024, 0, 1)
    with pytest.raises(InvalidDateError):
        greg.date_to_day_count(CalendarDate(2024, 4, 31))


# ---------------------------------------------------------
# Built-in calendars
# ---------------------------------------------------------

def test_warhammer_structure():
    core = ArithmeticCore(WARHAMMER)
    assert core.get_year_length(2522) == 400
    assert core.get_year_weekday_days(2522) == 394
    assert not core.is_leap_year(2524)

    # Hexenstag closes the year; the next day is 1 Nachexen
    hexenstag = CalendarDate(2522, 12, 1, intercalary="Hexenstag")
    nxt = core.add_days(hexenstag, 1)
    assert nxt == CalendarDate(2523, 1, 1)
    assert core.calculate_weekday(2523, 1, 1) == (core.calculate_weekday(2522, 12, 33) + 1) % 8


def test_dark_sun_blocks():
    core = ArithmeticCore(DARK_SUN)
    assert core.get_year_length(190) == 375
    # 360 counting days in a 6-day week: every year starts on the same weekday
    assert {core.calculate_weekday(y, 1, 1) for y in range(0, 50)} == {0}

    first = core.add_days(CalendarDate(190, 4, 30), 1)
    assert first.intercalary == "Cooling Sun"
    fifth = core.add_days(first, 4)
    assert (fifth.intercalary, fifth.day) == ("Cooling Sun", 5)
    assert core.add_days(fifth, 1) == CalendarDate(190, 5, 1)

    # the five-day block pauses the week
    assert core.calculate_weekday(190, 5, 1) == (core.calculate_weekday(190, 4, 30) + 1) % 6
    for d in range(1, 6):
        assert core.calculate_weekday(190, 4, d, "Cooling Sun") == core.calculate_weekday(190, 5, 1)


def test_one_month_calendar_and_one_day_week():
    cal = CalendarDefinition(
        id="tiny",
        months=(Month("Only", 10),),
        weekdays=(Weekday("Day"),),
        year=YearConfig(epoch=5),
    )
    core = ArithmeticCore(cal)
    assert core.add_months(CalendarDate(5, 1, 3), 1) == CalendarDate(6, 1, 3)
    assert core.add_months(CalendarDate(5, 1, 3), -2) == CalendarDate(3, 1, 3)
    assert core.day_count_to_date(-1) == CalendarDate(4, 1, 10)
    assert {core.calculate_weekday(5, 1, d) for d in range(1, 11)} == {0}


def test_round_trip_random_days():
    random.seed(7)
    for cal in (GREGORIAN, WARHAMMER, DARK_SUN):
        core = ArithmeticCore(cal)
        for _ in range(1000):
            n = random.randint(-2_000_000, 2_000_000)
            d = core.day_count_to_date(n)
            assert core.date_to_day_count(d) == n
            assert core.calculate_weekday(d.year, d.month, d.day, d.intercalary) == d.weekday


def test_weekday_cycle_is_continuous():
    """Consecutive counting days advance the weekday by exactly one."""
    for cal in (GREGORIAN, WARHAMMER, DARK_SUN):
        core = ArithmeticCore(cal)
        prev = None
        for n in range(-800, 800):
            d = core.day_count_to_date(n)
            if d.intercalary is not None:
                rule = next(r for r in cal.intercalary if r.name == d.intercalary)
                if not rule.counts_for_weekdays:
                    continue
            if prev is not None:
                assert d.weekday == (prev + 1) % cal.week_length
            prev = d.weekday


def test_large_year_spans_are_exact():
    core = ArithmeticCore(GREGORIAN.tweak(leap_year=GregorianLeapRule(month="February")))
    assert core.days_between_years(2024, 2024 + 400) == 146097
    assert core.days_between_years(2024 - 400_000, 2024) == 146097 * 1000


def test_adding_a_week_keeps_weekday(leapday):
    random.seed(11)
    for core in (ArithmeticCore(GREGORIAN), leapday):
        n = core.cal.week_length
        for _ in range(500):
            d = core.day_count_to_date(random.randint(-100000, 100000))
            assert core.add_days(d, n).weekday == d.weekday


def test_leap_years_add_exactly_extra_days():
    for cal in (GREGORIAN, GREGORIAN.tweak(leap_year=CustomLeapRule(interval=5, month="March", extra_days=3))):
        core = ArithmeticCore(cal)
        common = next(y for y in range(2000, 2100) if not core.is_leap_year(y))
        leap = next(y for y in range(2000, 2100) if core.is_leap_year(y))
        assert core.get_year_length(leap) - core.get_year_length(common) == cal.leap_year.extra_days

    flat = ArithmeticCore(WARHAMMER)
    assert len({flat.get_year_length(y) for y in range(0, 50)}) == 1


def test_adding_month_count_moves_one_year():
    random.seed(3)
    for cal in (GREGORIAN, WARHAMMER, DARK_SUN):
        core = ArithmeticCore(cal)
        for _ in range(300):
            d = core.day_count_to_date(random.randint(-50000, 50000))
            if d.intercalary is not None:
                continue
            # Leap days have no counterpart in a common year
            if d.day > core.get_month_length(d.month, d.year + 1):
                continue
            out = core.add_months(d, cal.month_count)
            assert (out.year, out.month, out.day) == (d.year + 1, d.month, d.day)


@pytest.fixture
def twin_blocks():
    """Two blocks after the first month, declared out of name order: one in the week, one outside it."""
    cal = CalendarDefinition(
        id="twins",
        months=(Month("A", 10), Month("B", 10)),
        weekdays=tuple(Weekday(str(i)) for i in range(7)),
        intercalary=(
            IntercalaryRule("Zed", "A", days=2),
            IntercalaryRule("Alpha", "A", days=3, counts_for_weekdays=False),
        ),
    )
    return ArithmeticCore(cal)


def test_blocks_after_one_month_walk_in_declaration_order(twin_blocks):
    core = twin_blocks
    last = CalendarDate(1, 1, 10)
    walk = [core.add_days(last, n) for n in range(1, 7)]
    assert [(d.intercalary, d.day) for d in walk] == [
        ("Zed", 1), ("Zed", 2), ("Alpha", 1), ("Alpha", 2), ("Alpha", 3), (None, 1),
    ]
    assert [d.block for d in walk] == [1, 1, 2, 2, 2, 0]
    assert walk[-1] == CalendarDate(1, 2, 1)

    # backwards through both blocks
    assert core.add_days(walk[-1], -1) == walk[-2]
    assert core.add_days(walk[-1], -5) == walk[1]
    assert core.add_days(walk[-1], -6).intercalary == "Zed"


def test_blocks_after_one_month_weekdays(twin_blocks):
    core = twin_blocks
    wd_last = core.calculate_weekday(1, 1, 10)
    assert core.calculate_weekday(1, 1, 1, "Zed") == (wd_last + 1) % 7
    assert core.calculate_weekday(1, 1, 2, "Zed") == (wd_last + 2) % 7
    wd_next = core.calculate_weekday(1, 2, 1)
    assert wd_next == (wd_last + 3) % 7
    for d in range(1, 4):
        assert core.calculate_weekday(1, 1, d, "Alpha") == wd_next


def test_engine_dates_sort_in_walk_order(twin_blocks):
    core = twin_blocks
    zed2 = core.day_count_to_date(core.date_to_day_count(CalendarDate(1, 1, 2, intercalary="Zed")))
    alpha1 = core.add_days(zed2, 1)
    assert zed2 < alpha1
    assert alpha1 > zed2
    # the block position is not part of equality
    assert zed2 == CalendarDate(1, 1, 2, intercalary="Zed")
    assert hash(zed2) == hash(CalendarDate(1, 1, 2, intercalary="Zed"))

    start = core.date_to_day_count(CalendarDate(0, 1, 1))
    walk = [core.day_count_to_date(start + n) for n in range(3 * 25)]
    assert all(a < b for a, b in zip(walk, walk[1:]))
    random.seed(7)
    shuffled = walk[:]
    random.shuffle(shuffled)
    assert sorted(shuffled) == walk


def test_add_years_keeps_block_position(twin_blocks):
    core = twin_blocks
    d = core.add_days(CalendarDate(3, 1, 10), 4)
    assert (d.intercalary, d.day, d.block) == ("Alpha", 2, 2)
    moved = core.add_years(d, 2)
    assert (moved.year, moved.intercalary, moved.day, moved.block) == (5, "Alpha", 2, 2)
