"""
worldcal.engines.arithmetic
---------------------------
Pure day-count arithmetic over a CalendarDefinition.

Absolute day index 0 is the first day of the epoch year. Every year is laid
out as an ordered list of segments: each month, followed by the intercalary
blocks attached after it (in declaration order). Both directions of the
conversion walk the same segment table, so an offset that lands inside an
intercalary block is reported as that block and never as an out-of-range
day of a neighbouring month.

Year lengths depend only on whether a year is a leap year, so the number of
days between two years is computed from the leap rule's closed-form leap
count instead of a year-by-year loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Optional, Tuple

from ..core.errors import InvalidDateError
from ..core.time import normalize_month, normalize_weekday
from ..core.types import CalendarDate, CalendarDefinition, IntercalaryRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """A contiguous run of days inside one year."""
    kind: Literal["month", "intercalary"]
    month: int            # 1-based; for intercalary blocks, the month they follow
    length: int
    start: int            # offset of the first day within the year
    weekday_start: int    # weekday-counting days in the year before this segment
    counts_for_weekdays: bool = True
    name: Optional[str] = None
    block: int = 0        # declaration position among the blocks after `month`

    @property
    def end(self) -> int:
        return self.start + self.length


class ArithmeticCore:
    """
    Stateless (apart from read-only caches) calendar arithmetic.
    Fully implements ArithmeticCoreProtocol.
    """
    def __init__(self, cal: CalendarDefinition):
        self.cal = cal
        self._segments = lru_cache(maxsize=512)(self._build_segments)

        self._common_len, self._common_weekday_len = self._lengths_for(leap=False)
        self._leap_len, self._leap_weekday_len = self._lengths_for(leap=True)

        logger.debug(
            "Arithmetic core for %r: common year %d days, leap year %d days",
            cal.id, self._common_len, self._leap_len,
        )

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------

    @property
    def epoch(self) -> int:
        return self.cal.year.epoch

    def is_leap_year(self, year: int) -> bool:
        return self.cal.leap_year.is_leap(year)

    def get_month_lengths(self, year: int) -> Tuple[int, ...]:
        """Month lengths for `year`, leap days included. Intercalary days are not."""
        lengths = [m.days for m in self.cal.months]
        rule = self.cal.leap_year
        if rule.month is not None and self.is_leap_year(year):
            lengths[self.cal.month_index(rule.month) - 1] += rule.extra_days
        return tuple(lengths)

    def get_month_length(self, month: int, year: int) -> int:
        self._check_month(month)
        return self.get_month_lengths(year)[month - 1]

    def get_intercalary_days(self, year: int) -> Tuple[IntercalaryRule, ...]:
        """Intercalary rules active in `year`, in declaration order."""
        leap = self.is_leap_year(year)
        return tuple(r for r in self.cal.intercalary if leap or not r.leap_year_only)

    def get_intercalary_after_month(self, year: int, month: int) -> Tuple[IntercalaryRule, ...]:
        self._check_month(month)
        name = self.cal.months[month - 1].name
        return tuple(r for r in self.get_intercalary_days(year) if r.after == name)

    def get_year_length(self, year: int) -> int:
        return self._leap_len if self.is_leap_year(year) else self._common_len

    def get_year_weekday_days(self, year: int) -> int:
        """Days in `year` that advance the weekday cycle."""
        return self._leap_weekday_len if self.is_leap_year(year) else self._common_weekday_len

    def year_segments(self, year: int) -> Tuple[Segment, ...]:
        return self._segments(year)

    def _lengths_for(self, *, leap: bool) -> Tuple[int, int]:
        base = sum(m.days for m in self.cal.months)
        rule = self.cal.leap_year
        if leap and rule.month is not None:
            base += rule.extra_days
        total = base
        weekday_total = base
        for r in self.cal.intercalary:
            if r.leap_year_only and not leap:
                continue
            total += r.days
            if r.counts_for_weekdays:
                weekday_total += r.days
        return total, weekday_total

    def _build_segments(self, year: int) -> Tuple[Segment, ...]:
        lengths = self.get_month_lengths(year)
        active = self.get_intercalary_days(year)

        segments = []
        pos = 0
        wpos = 0
        for i, month in enumerate(self.cal.months, start=1):
            segments.append(Segment("month", i, lengths[i - 1], pos, wpos))
            pos += lengths[i - 1]
            wpos += lengths[i - 1]
            block = 0
            for rule in self.cal.intercalary:
                if rule.after != month.name:
                    continue
                block += 1
                if rule not in active:
                    continue
                segments.append(
                    Segment("intercalary", i, rule.days, pos, wpos, rule.counts_for_weekdays, rule.name, block)
                )
                pos += rule.days
                if rule.counts_for_weekdays:
                    wpos += rule.days
        return tuple(segments)

    # ---------------------------------------------------------
    # Spans of whole years
    # ---------------------------------------------------------

    def _span(self, start: int, end: int, common: int, leap: int) -> int:
        """Sum of year lengths over [start, end), end >= start."""
        leaps = self.cal.leap_year.count_between(start, end)
        return (end - start) * common + leaps * (leap - common)

    def days_between_years(self, start_year: int, end_year: int) -> int:
        """Signed number of days from the first day of start_year to the first day of end_year."""
        if end_year >= start_year:
            return self._span(start_year, end_year, self._common_len, self._leap_len)
        return -self._span(end_year, start_year, self._common_len, self._leap_len)

    def days_before_year(self, year: int) -> int:
        """Absolute day index of the first day of `year`."""
        return self.days_between_years(self.epoch, year)

    def weekday_days_before_year(self, year: int) -> int:
        e = self.epoch
        if year >= e:
            return self._span(e, year, self._common_weekday_len, self._leap_weekday_len)
        return -self._span(year, e, self._common_weekday_len, self._leap_weekday_len)

    # ---------------------------------------------------------
    # Validation
    # ---------------------------------------------------------

    def _check_month(self, month: int) -> None:
        if not (1 <= month <= self.cal.month_count):
            raise InvalidDateError(f"month {month} outside 1..{self.cal.month_count}")

    def find_segment(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> Segment:
        """Locate the segment holding a date, failing fast on anything out of range."""
        self._check_month(month)
        for seg in self.year_segments(year):
            if seg.month != month:
                continue
            if intercalary is None and seg.kind == "month":
                break
            if intercalary is not None and seg.kind == "intercalary" and seg.name == intercalary:
                break
        else:
            raise InvalidDateError(
                f"intercalary period '{intercalary}' does not follow month {month} in year {year}"
            )
        if not (1 <= day <= seg.length):
            what = f"'{intercalary}'" if intercalary is not None else f"month {month} of year {year}"
            raise InvalidDateError(f"day {day} outside 1..{seg.length} for {what}")
        return seg

    # ---------------------------------------------------------
    # Forward: date -> absolute day
    # ---------------------------------------------------------

    def date_to_day_count(self, date: CalendarDate) -> int:
        seg = self.find_segment(date.year, date.month, date.day, date.intercalary)
        return self.days_before_year(date.year) + seg.start + date.day - 1

    def day_of_year(self, date: CalendarDate) -> int:
        """1-based position of the date inside its year, intercalary days included."""
        seg = self.find_segment(date.year, date.month, date.day, date.intercalary)
        return seg.start + date.day

    # ---------------------------------------------------------
    # Inverse: absolute day -> date
    # ---------------------------------------------------------

    def day_count_to_date(self, days: int) -> CalendarDate:
        year = self.epoch + days // self._common_len
        start = self.days_before_year(year)

        # The estimate ignores leap days; walk to the exact year.
        while days < start:
            year -= 1
            start -= self.get_year_length(year)
        while days >= start + self.get_year_length(year):
            start += self.get_year_length(year)
            year += 1

        offset = days - start
        for seg in self.year_segments(year):
            if offset < seg.end:
                day = offset - seg.start + 1
                return CalendarDate(
                    year=year,
                    month=seg.month,
                    day=day,
                    weekday=self._weekday_in_segment(year, seg, day),
                    intercalary=seg.name if seg.kind == "intercalary" else None,
                    block=seg.block,
                )
        raise RuntimeError("unreachable")

    # ---------------------------------------------------------
    # Weekdays
    # ---------------------------------------------------------

    def _weekday_in_segment(self, year: int, seg: Segment, day: int) -> int:
        count = self.weekday_days_before_year(year) + seg.weekday_start
        # A non-counting block pauses the cycle: all its days share the weekday
        # of the next regular day.
        if seg.counts_for_weekdays:
            count += day - 1
        return normalize_weekday(self.cal.year.start_day + count, self.cal.week_length)

    def calculate_weekday(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> int:
        seg = self.find_segment(year, month, day, intercalary)
        return self._weekday_in_segment(year, seg, day)

    # ---------------------------------------------------------
    # Calendar arithmetic
    # ---------------------------------------------------------

    def add_days(self, date: CalendarDate, n: int) -> CalendarDate:
        out = self.day_count_to_date(self.date_to_day_count(date) + n)
        return out.replace(time=date.time)

    def _month_anchor(self, date: CalendarDate) -> int:
        """Day-of-month used by month/year arithmetic; intercalary dates anchor to the end of their month."""
        self.find_segment(date.year, date.month, date.day, date.intercalary)
        if date.intercalary is not None:
            return self.get_month_length(date.month, date.year)
        return date.day

    def add_months(self, date: CalendarDate, n: int) -> CalendarDate:
        anchor = self._month_anchor(date)
        month, year = normalize_month(date.month + n, date.year, self.cal.month_count)
        day = min(anchor, self.get_month_length(month, year))
        return CalendarDate(
            year=year,
            month=month,
            day=day,
            weekday=self.calculate_weekday(year, month, day),
            time=date.time,
        )

    def add_years(self, date: CalendarDate, n: int) -> CalendarDate:
        anchor = self._month_anchor(date)
        year = date.year + n

        if date.intercalary is not None:
            for seg in self.year_segments(year):
                if seg.kind == "intercalary" and seg.name == date.intercalary and seg.month == date.month:
                    day = min(date.day, seg.length)
                    return CalendarDate(
                        year=year,
                        month=date.month,
                        day=day,
                        weekday=self._weekday_in_segment(year, seg, day),
                        intercalary=date.intercalary,
                        time=date.time,
                        block=seg.block,
                    )
            # Leap-only block missing from the target year.

        day = min(anchor, self.get_month_length(date.month, year))
        return CalendarDate(
            year=year,
            month=date.month,
            day=day,
            weekday=self.calculate_weekday(year, date.month, day),
            time=date.time,
        )
