"""
worldcal.engines.interfaces
---------------------------
Defines the boundaries between the discrete day arithmetic (ArithmeticCore),
the worldTime policy layer (WorldTimeConverter), and the orchestrator
(CalendarEngine).

Standard Reference Frame:
Absolute day index 0 is the first day of the calendar's epoch year. Only the
WorldTime layer knows about seconds and about re-basing worldTime=0 onto a
different year.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union

from ..core.types import CalendarDate, CalendarDefinition, IntercalaryRule

# worldTime may be fractional; conversions floor it to whole seconds
NumT = Union[int, float]


class ArithmeticCoreProtocol(Protocol):
    """
    Handles discrete arithmetic. Maps absolute day indices to calendar
    labels (year, month, day, intercalary) and back.
    """
    cal: CalendarDefinition

    # ---------------------------------------------------------
    # 1. Year structure
    # ---------------------------------------------------------
    def is_leap_year(self, year: int) -> bool:
        ...

    def get_year_length(self, year: int) -> int:
        """Month days, leap days and active intercalary days."""
        ...

    def get_month_lengths(self, year: int) -> Sequence[int]:
        """Month-length table; intercalary days are out-of-band."""
        ...

    def get_month_length(self, month: int, year: int) -> int:
        ...

    def get_intercalary_days(self, year: int) -> Sequence[IntercalaryRule]:
        ...

    def get_intercalary_after_month(self, year: int, month: int) -> Sequence[IntercalaryRule]:
        ...

    def days_between_years(self, start_year: int, end_year: int) -> int:
        """Signed day distance between the first days of two years."""
        ...

    # ---------------------------------------------------------
    # 2. Conversion
    # ---------------------------------------------------------
    def date_to_day_count(self, date: CalendarDate) -> int:
        ...

    def day_count_to_date(self, days: int) -> CalendarDate:
        """Exact inverse of date_to_day_count; weekday filled in."""
        ...

    def calculate_weekday(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> int:
        ...

    def day_of_year(self, date: CalendarDate) -> int:
        ...

    # ---------------------------------------------------------
    # 3. Arithmetic
    # ---------------------------------------------------------
    def add_days(self, date: CalendarDate, n: int) -> CalendarDate:
        ...

    def add_months(self, date: CalendarDate, n: int) -> CalendarDate:
        ...

    def add_years(self, date: CalendarDate, n: int) -> CalendarDate:
        ...


class WorldTimeProtocol(Protocol):
    """
    Translates the host's scalar worldTime (seconds) to dates with a time of
    day, honouring the calendar's interpretation policy.
    """
    def epoch_offset_days(self) -> int:
        """Absolute day index that worldTime=0 falls on."""
        ...

    def world_time_to_date(self, world_time: NumT) -> CalendarDate:
        ...

    def date_to_world_time(self, date: CalendarDate) -> int:
        ...
