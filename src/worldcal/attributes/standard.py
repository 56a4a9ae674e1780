from __future__ import annotations
from typing import Any, Dict

from .registry import register_attribute, seconds_into_day

def names(info, engine) -> Dict[str, Any]:
    cal = engine.cal
    d = info.date
    return {
        "month_name": cal.months[d.month - 1].name,
        "weekday_name": cal.weekdays[d.weekday].name,
        "intercalary_name": d.intercalary,
        "year_label": f"{cal.year.prefix}{d.year}{cal.year.suffix}",
    }

def day_of_year(info, engine) -> Dict[str, Any]:
    return {
        "day_of_year": engine.day_of_year(info.date),
        "year_length": engine.get_year_length(info.date.year),
    }

def day_progress(info, engine) -> Dict[str, Any]:
    # Fraction of the day elapsed, 0 <= p < 1.
    return {"day_progress": seconds_into_day(info, engine) / engine.cal.time.seconds_per_day}

def season(info, engine) -> Dict[str, Any]:
    # Quarters of the year by day position, 1..4.
    doy = engine.day_of_year(info.date)
    length = engine.get_year_length(info.date.year)
    return {"season": (doy - 1) * 4 // length + 1}

register_attribute("names", names)
register_attribute("day_of_year", day_of_year)
register_attribute("day_progress", day_progress)
register_attribute("season", season)
