"""worldcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    get_engine,
    get_calendar,
    make_engine,
    register_calendar,
    load_calendar,
    world_time_to_date,
    date_to_world_time,
    make_date,
    day_info,
    add_days,
    add_weeks,
    add_months,
    add_years,
    add_hours,
    add_minutes,
    add_seconds,
    days_between,
    calculate_weekday,
    is_leap_year,
    get_year_length,
    get_month_lengths,
    month_info,
    year_info,
    month_days,
    definition,
)
from .core.errors import CalendarConfigError, InvalidDateError, WorldcalError
from .core.types import CalendarDate, CalendarDefinition, DayInfo, TimeOfDay

__all__ = [
    "list_calendars",
    "calendar_info",
    "get_engine",
    "get_calendar",
    "make_engine",
    "register_calendar",
    "load_calendar",
    "world_time_to_date",
    "date_to_world_time",
    "make_date",
    "day_info",
    "add_days",
    "add_weeks",
    "add_months",
    "add_years",
    "add_hours",
    "add_minutes",
    "add_seconds",
    "days_between",
    "calculate_weekday",
    "is_leap_year",
    "get_year_length",
    "get_month_lengths",
    "month_info",
    "year_info",
    "month_days",
    "definition",
    "CalendarDate",
    "CalendarDefinition",
    "DayInfo",
    "TimeOfDay",
    "CalendarConfigError",
    "InvalidDateError",
    "WorldcalError",
]
