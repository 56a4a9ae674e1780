"""
worldcal.engines.calendar
-------------------------
The Orchestrator. Binds the ArithmeticCore and the WorldTimeConverter
together and exposes the calendar's public entry points.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..core.time import (
    normalize_month,
    seconds_per_day,
    seconds_per_hour,
    seconds_to_time_of_day,
    time_of_day_to_seconds,
    weeks_to_days,
)
from ..core.types import CalendarDate, CalendarDefinition, MIDNIGHT
from .interfaces import ArithmeticCoreProtocol, NumT, WorldTimeProtocol


class CalendarEngine:
    """
    Translates worldTime to calendar dates and back, and performs calendar
    arithmetic, for one CalendarDefinition. Holds no mutable state: one
    instance may be shared freely between threads.
    """
    def __init__(
        self,
        cal: CalendarDefinition,
        arithmetic: ArithmeticCoreProtocol,
        world_time: WorldTimeProtocol,
    ):
        self.cal = cal
        self.arithmetic = arithmetic
        self.world_time = world_time

        if self.arithmetic.cal is not cal:
            raise ValueError("arithmetic core was built for a different calendar")

    @property
    def id(self) -> str:
        return self.cal.id

    # ---------------------------------------------------------
    # worldTime <-> date
    # ---------------------------------------------------------

    def world_time_to_date(self, world_time: NumT) -> CalendarDate:
        return self.world_time.world_time_to_date(world_time)

    def date_to_world_time(self, date: CalendarDate) -> int:
        return self.world_time.date_to_world_time(date)

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.arithmetic.is_leap_year(year)

    def get_year_length(self, year: int) -> int:
        return self.arithmetic.get_year_length(year)

    def get_month_lengths(self, year: int) -> Tuple[int, ...]:
        return tuple(self.arithmetic.get_month_lengths(year))

    def get_month_length(self, month: int, year: int) -> int:
        return self.arithmetic.get_month_length(month, year)

    def intercalary_days(self, year: int):
        return self.arithmetic.get_intercalary_days(year)

    def calculate_weekday(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> int:
        return self.arithmetic.calculate_weekday(year, month, day, intercalary)

    def month_start_weekday(self, year: int, month: int) -> int:
        return self.arithmetic.calculate_weekday(year, month, 1)

    def day_of_year(self, date: CalendarDate) -> int:
        return self.arithmetic.day_of_year(date)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def add_days(self, date: CalendarDate, n: int) -> CalendarDate:
        return self.arithmetic.add_days(date, n)

    def add_weeks(self, date: CalendarDate, n: int) -> CalendarDate:
        return self.arithmetic.add_days(date, weeks_to_days(n, self.cal))

    def add_months(self, date: CalendarDate, n: int) -> CalendarDate:
        return self.arithmetic.add_months(date, n)

    def add_years(self, date: CalendarDate, n: int) -> CalendarDate:
        return self.arithmetic.add_years(date, n)

    def add_seconds(self, date: CalendarDate, n: int) -> CalendarDate:
        """Shift by whole seconds, carrying into days; the result always has a time of day."""
        units = self.cal.time
        total = time_of_day_to_seconds(date.time, units) + n
        extra_days, seconds_in_day = divmod(total, seconds_per_day(units))
        moved = self.arithmetic.add_days(date, extra_days) if extra_days else date
        return moved.replace(time=seconds_to_time_of_day(seconds_in_day, units))

    def add_minutes(self, date: CalendarDate, n: int) -> CalendarDate:
        return self.add_seconds(date, n * self.cal.time.seconds_per_minute)

    def add_hours(self, date: CalendarDate, n: int) -> CalendarDate:
        return self.add_seconds(date, n * seconds_per_hour(self.cal.time))

    def days_between(self, a: CalendarDate, b: CalendarDate) -> int:
        """Whole days from a to b (negative when b is earlier)."""
        delta = self.date_to_world_time(b) - self.date_to_world_time(a)
        return delta // seconds_per_day(self.cal.time)

    def sort_key(self, date: CalendarDate) -> Tuple[int, Tuple[int, int, int]]:
        """Exact chronological key, including the order of several blocks after one month."""
        t = date.time or MIDNIGHT
        return (self.arithmetic.date_to_day_count(date), t.as_tuple())

    def normalize_month(self, month: int, year: int) -> Tuple[int, int]:
        return normalize_month(month, year, self.cal.month_count)

    # ---------------------------------------------------------
    # High-Level API Methods (Required by CLI / api.py)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        cal = self.cal
        return {
            "id": cal.id,
            "label": cal.label,
            "months": len(cal.months),
            "week_length": cal.week_length,
            "epoch": cal.year.epoch,
            "current_year": cal.year.current_year,
            "leap_rule": cal.leap_year.rule,
            "intercalary": [r.name for r in cal.intercalary],
            "seconds_per_day": cal.time.seconds_per_day,
            "interpretation": cal.interpretation.value,
            "epoch_offset_days": self.world_time.epoch_offset_days(),
        }

    def month_info(self, year: int, month: int) -> Dict[str, Any]:
        days = self.get_month_length(month, year)
        return {
            "year": year,
            "month": month,
            "name": self.cal.months[month - 1].name,
            "days": days,
            "first_weekday": self.month_start_weekday(year, month),
            "intercalary_after": [
                {"name": r.name, "days": r.days, "counts_for_weekdays": r.counts_for_weekdays}
                for r in self.arithmetic.get_intercalary_after_month(year, month)
            ],
        }

    def year_info(self, year: int) -> Dict[str, Any]:
        return {
            "year": year,
            "leap": self.is_leap_year(year),
            "length": self.get_year_length(year),
            "first_day_world_time": self.date_to_world_time(CalendarDate(year, 1, 1)),
            "months": [self.month_info(year, m) for m in range(1, self.cal.month_count + 1)],
        }

    def month_days(self, year: int, month: int) -> List[CalendarDate]:
        """Every date of a month followed by the intercalary blocks attached after it."""
        first = CalendarDate(year, month, 1, weekday=self.month_start_weekday(year, month))
        count = self.get_month_length(month, year)
        count += sum(r.days for r in self.arithmetic.get_intercalary_after_month(year, month))
        return [self.add_days(first, i) for i in range(count)]
