from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .core.engine import EngineRegistry
from .core.time import check_time_of_day
from .core.types import CalendarDate, CalendarDefinition, DayInfo, TimeOfDay
from .attributes.registry import compute_attributes
from .attributes import standard as _standard  # noqa: F401  (registers built-in attributes)
from .engines.calendar import CalendarEngine
from .engines.factory import CalendarSource, make_engine as _make_engine

_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: str) -> Dict[str, Any]:
    return _reg().get(calendar).info()

def get_engine(calendar: str) -> CalendarEngine:
    return _reg().get(calendar)

def make_engine(spec: CalendarSource) -> CalendarEngine:
    return _make_engine(spec)

def get_calendar(name: str, **overrides) -> CalendarEngine:
    """Fresh engine for a built-in definition, optionally with fields replaced."""
    from .engines.specs import like
    cal = like(name)
    if overrides:
        cal = cal.tweak(**overrides)
    return _make_engine(cal)

def register_calendar(spec: CalendarSource, *, overwrite: bool = False) -> CalendarEngine:
    eng = _make_engine(spec)
    _reg().register(eng.id, eng, overwrite=overwrite)
    return eng

def load_calendar(path: str, *, register: bool = True, overwrite: bool = False) -> CalendarEngine:
    from .loader import load_calendar_file
    cal = load_calendar_file(path)
    if register:
        return register_calendar(cal, overwrite=overwrite)
    return _make_engine(cal)

# ============================================================
# worldTime <-> date
# ============================================================

def world_time_to_date(world_time: float, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).world_time_to_date(world_time)

def date_to_world_time(date: CalendarDate, *, calendar: str = "gregorian") -> int:
    return _reg().get(calendar).date_to_world_time(date)

def make_date(
    year: int,
    month: int,
    day: int,
    *,
    intercalary: Optional[str] = None,
    time: Optional[Tuple[int, int, int]] = None,
    calendar: str = "gregorian",
) -> CalendarDate:
    """Build a date with its weekday filled in; raises InvalidDateError when it does not exist."""
    eng = _reg().get(calendar)
    wd = eng.calculate_weekday(year, month, day, intercalary)
    seg = eng.arithmetic.find_segment(year, month, day, intercalary)
    tod = TimeOfDay(*time) if time is not None else None
    if tod is not None:
        check_time_of_day(tod, eng.cal.time)
    return CalendarDate(year, month, day, weekday=wd, intercalary=intercalary, time=tod, block=seg.block)

def day_info(
    world_time: float,
    *,
    calendar: str = "gregorian",
    attributes: Sequence[str] = (),
    debug: bool = False,
) -> DayInfo:
    eng = _reg().get(calendar)
    date = eng.world_time_to_date(world_time)
    dbg = None
    if debug:
        dbg = {
            "day_count": eng.arithmetic.date_to_day_count(date),
            "epoch_offset_days": eng.world_time.epoch_offset_days(),
            "day_of_year": eng.day_of_year(date),
        }
    info = DayInfo(world_time=math.floor(world_time), calendar=eng.id, date=date, debug=dbg)
    if attributes:
        attrs = compute_attributes(info, eng, attributes)
        info = replace(info, attributes=attrs)
    return info

# ============================================================
# Arithmetic
# ============================================================

def add_days(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_days(date, n)

def add_weeks(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_weeks(date, n)

def add_months(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_months(date, n)

def add_years(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_years(date, n)

def add_hours(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_hours(date, n)

def add_minutes(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_minutes(date, n)

def add_seconds(date: CalendarDate, n: int, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).add_seconds(date, n)

def days_between(a: CalendarDate, b: CalendarDate, *, calendar: str = "gregorian") -> int:
    return _reg().get(calendar).days_between(a, b)

# ============================================================
# Year structure
# ============================================================

def calculate_weekday(
    year: int, month: int, day: int, *, intercalary: Optional[str] = None, calendar: str = "gregorian"
) -> int:
    return _reg().get(calendar).calculate_weekday(year, month, day, intercalary)

def is_leap_year(year: int, *, calendar: str = "gregorian") -> bool:
    return _reg().get(calendar).is_leap_year(year)

def get_year_length(year: int, *, calendar: str = "gregorian") -> int:
    return _reg().get(calendar).get_year_length(year)

def get_month_lengths(year: int, *, calendar: str = "gregorian") -> Tuple[int, ...]:
    return _reg().get(calendar).get_month_lengths(year)

def month_info(year: int, month: int, *, calendar: str = "gregorian") -> Dict[str, Any]:
    return _reg().get(calendar).month_info(year, month)

def year_info(year: int, *, calendar: str = "gregorian") -> Dict[str, Any]:
    return _reg().get(calendar).year_info(year)

def month_days(year: int, month: int, *, calendar: str = "gregorian") -> List[CalendarDate]:
    return _reg().get(calendar).month_days(year, month)

def definition(calendar: str = "gregorian") -> CalendarDefinition:
    """The frozen definition behind a registered calendar."""
    return _reg().get(calendar).cal
