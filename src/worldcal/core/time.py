from __future__ import annotations

import math
from typing import Tuple, Union

from .errors import InvalidDateError
from .types import CalendarDefinition, TimeOfDay, TimeUnits

Number = Union[int, float]


def seconds_per_day(units: TimeUnits) -> int:
    """Calendar-specific replacement for 86400."""
    return units.seconds_per_day


def seconds_per_hour(units: TimeUnits) -> int:
    return units.seconds_per_hour


def days_to_seconds(days: int, units: TimeUnits) -> int:
    return days * units.seconds_per_day


def weeks_to_days(weeks: int, cal: CalendarDefinition) -> int:
    return weeks * cal.week_length


def split_world_seconds(world_time: Number, units: TimeUnits) -> Tuple[int, int]:
    """
    floor(world_time) -> (day count, seconds into the day).
    Floor division keeps the remainder in [0, seconds_per_day) for negative input.
    """
    total = math.floor(world_time)
    return divmod(total, units.seconds_per_day)


def seconds_to_time_of_day(seconds_in_day: int, units: TimeUnits) -> TimeOfDay:
    if not (0 <= seconds_in_day < units.seconds_per_day):
        raise InvalidDateError(f"seconds_in_day must be in 0..{units.seconds_per_day - 1}")
    hour, rest = divmod(seconds_in_day, units.seconds_per_hour)
    minute, second = divmod(rest, units.seconds_per_minute)
    return TimeOfDay(hour, minute, second)


def time_of_day_to_seconds(t: TimeOfDay | None, units: TimeUnits) -> int:
    if t is None:
        return 0
    check_time_of_day(t, units)
    return t.hour * units.seconds_per_hour + t.minute * units.seconds_per_minute + t.second


def check_time_of_day(t: TimeOfDay, units: TimeUnits) -> None:
    if not (0 <= t.hour < units.hours_per_day):
        raise InvalidDateError(f"hour {t.hour} outside 0..{units.hours_per_day - 1}")
    if not (0 <= t.minute < units.minutes_per_hour):
        raise InvalidDateError(f"minute {t.minute} outside 0..{units.minutes_per_hour - 1}")
    if not (0 <= t.second < units.seconds_per_minute):
        raise InvalidDateError(f"second {t.second} outside 0..{units.seconds_per_minute - 1}")


def normalize_month(month: int, year: int, month_count: int) -> Tuple[int, int]:
    """
    Carry month overflow/underflow into the year.
    (13, Y) -> (1, Y+1) and (0, Y) -> (month_count, Y-1) for a 12-month calendar.
    """
    carry, m0 = divmod(month - 1, month_count)
    return m0 + 1, year + carry


def normalize_weekday(weekday: int, week_length: int) -> int:
    return weekday % week_length
