"""
worldcal.loader
---------------
Turns the interchange JSON schema into a CalendarDefinition.

Schema (camelCase keys, as written by calendar authoring tools):

    {
      "id": "warhammer",
      "translations": {"en": {"label": "...", "description": "...", "setting": "..."}},
      "year": {"epoch": 0, "currentYear": 2522, "prefix": "", "suffix": " IC", "startDay": 0},
      "leapYear": {"rule": "none" | "gregorian" | "custom", "interval": 4, "month": "...", "extraDays": 1},
      "months": [{"name": "...", "abbreviation": "...", "days": 32, "description": "..."}],
      "weekdays": [{"name": "...", "abbreviation": "..."}],
      "intercalary": [{"name": "...", "after": "<month name>", "days": 1,
                       "leapYearOnly": false, "countsForWeekdays": true}],
      "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
      "worldTime": {"interpretation": "epoch-based" | "real-time-based",
                    "epochYear": 0, "currentYear": 2522}
    }

Validation collects every problem before failing, so calendar authors see
the full list at once.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.errors import CalendarConfigError
from .core.leap import CustomLeapRule, GregorianLeapRule, LeapYearRule, NoLeapRule
from .core.types import (
    CalendarDefinition,
    IntercalaryRule,
    Month,
    TimeUnits,
    Weekday,
    WorldTimeConfig,
    WorldTimeInterpretation,
    YearConfig,
)

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_LEAP_RULES = ("none", "gregorian", "custom")
_INTERPRETATIONS = tuple(i.value for i in WorldTimeInterpretation)


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


# ============================================================
# Validation
# ============================================================

def validate(data: Any) -> ValidationResult:
    result = ValidationResult()
    if not isinstance(data, dict):
        result.errors.append("Calendar must be a JSON object")
        return result

    _check_required(data, result)
    if not result.errors:
        _check_types(data, result)
    if not result.errors:
        _check_constraints(data, result)
        _check_cross_references(data, result)
    return result


def _check_required(data: Dict[str, Any], result: ValidationResult) -> None:
    for key in ("id", "months", "weekdays"):
        if key not in data:
            result.errors.append(f"Missing required field: {key}")

    for i, month in enumerate(_as_list(data.get("months")), start=1):
        if not isinstance(month, dict):
            result.errors.append(f"Month {i} must be an object")
            continue
        if not month.get("name"):
            result.errors.append(f"Month {i} missing required field: name")
        if not _is_number(month.get("days")):
            result.errors.append(f"Month {i} missing required field: days")

    for i, weekday in enumerate(_as_list(data.get("weekdays")), start=1):
        if not isinstance(weekday, dict) or not weekday.get("name"):
            result.errors.append(f"Weekday {i} missing required field: name")

    for i, rule in enumerate(_as_list(data.get("intercalary")), start=1):
        if not isinstance(rule, dict):
            result.errors.append(f"Intercalary day {i} must be an object")
            continue
        if not rule.get("name"):
            result.errors.append(f"Intercalary day {i} missing required field: name")
        if not rule.get("after"):
            result.errors.append(f"Intercalary day {i} missing required field: after")


def _as_list(x: Any) -> list:
    return x if isinstance(x, list) else []


def _check_types(data: Dict[str, Any], result: ValidationResult) -> None:
    errors = result.errors

    if not isinstance(data["id"], str):
        errors.append("Calendar ID must be a string")

    translations = data.get("translations")
    if translations is not None:
        if not isinstance(translations, dict):
            errors.append("Calendar translations must be an object")
        else:
            if not translations:
                errors.append("Calendar must have at least one translation")
            for lang, tr in translations.items():
                if not isinstance(tr, dict):
                    errors.append(f"Translation for language '{lang}' must be an object")
                elif not isinstance(tr.get("label"), str) or not tr.get("label"):
                    errors.append(f"Translation for language '{lang}' missing required label")

    year = data.get("year")
    if year is not None:
        if not isinstance(year, dict):
            errors.append("Year configuration must be an object")
        else:
            for key in ("epoch", "currentYear", "startDay"):
                if key in year and not _is_int(year[key]):
                    errors.append(f"Year {key} must be an integer")
            for key in ("prefix", "suffix"):
                if key in year and not isinstance(year[key], str):
                    errors.append(f"Year {key} must be a string")

    leap = data.get("leapYear")
    if leap is not None:
        if not isinstance(leap, dict):
            errors.append("Leap year configuration must be an object")
        else:
            if "rule" in leap and leap["rule"] not in _LEAP_RULES:
                errors.append(f"Leap year rule must be one of: {', '.join(_LEAP_RULES)}")
            for key in ("interval", "extraDays"):
                if key in leap and not _is_int(leap[key]):
                    errors.append(f"Leap year {key} must be an integer")
            if "month" in leap and not isinstance(leap["month"], str):
                errors.append("Leap year month must be a string")

    if not isinstance(data["months"], list):
        errors.append("Months must be an array")
    if not isinstance(data["weekdays"], list):
        errors.append("Weekdays must be an array")
    if "intercalary" in data and not isinstance(data["intercalary"], list):
        errors.append("Intercalary days must be an array")

    for i, month in enumerate(_as_list(data["months"]), start=1):
        if not isinstance(month["name"], str):
            errors.append(f"Month {i} name must be a string")
        for key in ("abbreviation", "description"):
            if month.get(key) is not None and not isinstance(month[key], str):
                errors.append(f"Month {i} {key} must be a string")

    for i, weekday in enumerate(_as_list(data["weekdays"]), start=1):
        if not isinstance(weekday["name"], str):
            errors.append(f"Weekday {i} name must be a string")
        for key in ("abbreviation", "description"):
            if weekday.get(key) is not None and not isinstance(weekday[key], str):
                errors.append(f"Weekday {i} {key} must be a string")

    for i, rule in enumerate(_as_list(data.get("intercalary")), start=1):
        for key in ("name", "after"):
            if not isinstance(rule[key], str):
                errors.append(f"Intercalary day {i} {key} must be a string")
        if "days" in rule and not _is_int(rule["days"]):
            errors.append(f"Intercalary day {i} days must be an integer")
        for key in ("leapYearOnly", "countsForWeekdays"):
            if key in rule and not isinstance(rule[key], bool):
                errors.append(f"Intercalary day {i} {key} must be a boolean")

    time = data.get("time")
    if time is not None:
        if not isinstance(time, dict):
            errors.append("Time configuration must be an object")
        else:
            for key in ("hoursInDay", "minutesInHour", "secondsInMinute"):
                if key in time and not _is_int(time[key]):
                    errors.append(f"Time {key} must be an integer")

    wt = data.get("worldTime")
    if wt is not None:
        if not isinstance(wt, dict):
            errors.append("worldTime configuration must be an object")
        else:
            if "interpretation" in wt and wt["interpretation"] not in _INTERPRETATIONS:
                errors.append(f"worldTime interpretation must be one of: {', '.join(_INTERPRETATIONS)}")
            for key in ("epochYear", "currentYear"):
                if key in wt and not _is_int(wt[key]):
                    errors.append(f"worldTime {key} must be an integer")


def _check_constraints(data: Dict[str, Any], result: ValidationResult) -> None:
    errors = result.errors

    if not _ID_RE.match(data["id"]):
        errors.append("Calendar ID must contain only alphanumeric characters, hyphens, and underscores")

    months = data["months"]
    if not months:
        errors.append("Calendar must have at least one month")
    for i, month in enumerate(months, start=1):
        if not _is_int(month["days"]) or not (1 <= month["days"] <= 366):
            errors.append(f"Month {i} days must be an integer between 1 and 366")

    weekdays = data["weekdays"]
    if not weekdays:
        errors.append("Calendar must have at least one weekday")

    start_day = (data.get("year") or {}).get("startDay")
    if start_day is not None and weekdays and not (0 <= start_day < len(weekdays)):
        errors.append(f"Year startDay must be between 0 and {len(weekdays) - 1}")

    for key, value in (data.get("time") or {}).items():
        if key in ("hoursInDay", "minutesInHour", "secondsInMinute") and value < 1:
            errors.append(f"Time {key} must be at least 1")

    leap = data.get("leapYear") or {}
    if leap.get("rule") == "custom":
        if "interval" not in leap:
            errors.append("Custom leap year rule requires an interval")
        elif leap["interval"] < 1:
            errors.append("Leap year interval must be at least 1")
    if "extraDays" in leap and leap["extraDays"] < 1:
        errors.append("Leap year extraDays must be at least 1")

    for i, rule in enumerate(data.get("intercalary") or [], start=1):
        if rule.get("days", 1) < 1:
            errors.append(f"Intercalary day {i} days must be at least 1")


def _check_cross_references(data: Dict[str, Any], result: ValidationResult) -> None:
    errors = result.errors
    month_names = [m["name"] for m in data["months"]]
    weekday_names = [w["name"] for w in data["weekdays"]]

    if len(set(month_names)) != len(month_names):
        errors.append("Month names must be unique")
    if len(set(weekday_names)) != len(weekday_names):
        errors.append("Weekday names must be unique")

    leap_month = (data.get("leapYear") or {}).get("month")
    if leap_month and leap_month not in month_names:
        errors.append(f"Leap year month '{leap_month}' does not exist in months list")

    for i, rule in enumerate(data.get("intercalary") or [], start=1):
        if rule["after"] not in month_names:
            errors.append(f"Intercalary day {i} references non-existent month '{rule['after']}'")


def validate_with_help(data: Any) -> ValidationResult:
    """validate() plus warnings for fields that silently fall back to defaults."""
    result = validate(data)
    if not isinstance(data, dict):
        return result

    year = data.get("year") or {}
    if "epoch" not in year:
        result.warnings.append("Year epoch not specified, defaulting to 0")
    if "currentYear" not in year:
        result.warnings.append("Current year not specified, defaulting to 1")
    if "time" not in data:
        result.warnings.append("Time configuration not specified, using 24-hour day")
    if "leapYear" not in data:
        result.warnings.append("Leap year configuration not specified, no leap years will occur")
    if "translations" not in data:
        result.warnings.append("No translations given, using the calendar id as label")
    wt = data.get("worldTime")
    if isinstance(wt, dict) and isinstance(year, dict) and _is_int(wt.get("epochYear")):
        epoch = year.get("epoch", 0)
        if wt["epochYear"] != epoch:
            result.warnings.append(
                f"worldTime epochYear {wt['epochYear']} differs from year epoch {epoch}; "
                "day 0 is anchored at the year epoch"
            )
    for i, month in enumerate(_as_list(data.get("months")), start=1):
        if isinstance(month, dict) and not month.get("abbreviation"):
            result.warnings.append(f"Month {i} ({month.get('name')}) has no abbreviation")
    return result


def is_valid(data: Any) -> bool:
    return validate(data).is_valid


# ============================================================
# Building
# ============================================================

def _leap_rule(leap: Dict[str, Any]) -> LeapYearRule:
    rule = leap.get("rule", "none")
    if rule == "gregorian":
        return GregorianLeapRule(month=leap.get("month"), extra_days=leap.get("extraDays", 1))
    if rule == "custom":
        return CustomLeapRule(interval=leap["interval"], month=leap.get("month"), extra_days=leap.get("extraDays", 1))
    return NoLeapRule()


def _translation(data: Dict[str, Any], language: str) -> Dict[str, Any]:
    translations = data.get("translations") or {}
    if language in translations:
        return translations[language]
    if "en" in translations:
        return translations["en"]
    return next(iter(translations.values()), {})


def load_calendar(data: Dict[str, Any], *, language: str = "en") -> CalendarDefinition:
    """Validate a schema dict and build the CalendarDefinition. Raises CalendarConfigError."""
    result = validate_with_help(data)
    if not result.is_valid:
        raise CalendarConfigError(result.errors)
    for w in result.warnings:
        logger.warning("Calendar %r: %s", data.get("id"), w)

    year = data.get("year") or {}
    time = data.get("time") or {}
    tr = _translation(data, language)

    world_time: Optional[WorldTimeConfig] = None
    if data.get("worldTime") is not None:
        wt = data["worldTime"]
        world_time = WorldTimeConfig(
            interpretation=WorldTimeInterpretation(wt.get("interpretation", "epoch-based")),
            epoch_year=wt.get("epochYear"),
            current_year=wt.get("currentYear"),
        )

    return CalendarDefinition(
        id=data["id"],
        label=tr.get("label") or data["id"],
        description=tr.get("description"),
        setting=tr.get("setting"),
        months=tuple(
            Month(
                name=m["name"],
                days=m["days"],
                abbreviation=m.get("abbreviation"),
                description=m.get("description"),
            )
            for m in data["months"]
        ),
        weekdays=tuple(
            Weekday(name=w["name"], abbreviation=w.get("abbreviation"), description=w.get("description"))
            for w in data["weekdays"]
        ),
        year=YearConfig(
            epoch=year.get("epoch", 0),
            current_year=year.get("currentYear", 1),
            start_day=year.get("startDay", 0),
            prefix=year.get("prefix", ""),
            suffix=year.get("suffix", ""),
        ),
        leap_year=_leap_rule(data.get("leapYear") or {}),
        intercalary=tuple(
            IntercalaryRule(
                name=r["name"],
                after=r["after"],
                days=r.get("days", 1),
                leap_year_only=r.get("leapYearOnly", False),
                counts_for_weekdays=r.get("countsForWeekdays", True),
                description=r.get("description"),
            )
            for r in data.get("intercalary") or []
        ),
        time=TimeUnits(
            hours_per_day=time.get("hoursInDay", 24),
            minutes_per_hour=time.get("minutesInHour", 60),
            seconds_per_minute=time.get("secondsInMinute", 60),
        ),
        world_time=world_time,
    )


def loads_calendar(text: str, **kwargs) -> CalendarDefinition:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CalendarConfigError(f"Calendar is not valid JSON: {e}") from e
    return load_calendar(data, **kwargs)


def load_calendar_file(path: Union[str, Path], **kwargs) -> CalendarDefinition:
    p = Path(path)
    logger.info("Loading calendar from %s", p)
    return loads_calendar(p.read_text(encoding="utf-8"), **kwargs)


def dump_calendar(cal: CalendarDefinition) -> Dict[str, Any]:
    """Inverse of load_calendar: CalendarDefinition -> schema dict."""
    out: Dict[str, Any] = {
        "id": cal.id,
        "translations": {"en": {"label": cal.label or cal.id}},
        "year": {
            "epoch": cal.year.epoch,
            "currentYear": cal.year.current_year,
            "prefix": cal.year.prefix,
            "suffix": cal.year.suffix,
            "startDay": cal.year.start_day,
        },
        "leapYear": {"rule": cal.leap_year.rule},
        "months": [_drop_none({"name": m.name, "abbreviation": m.abbreviation, "days": m.days,
                               "description": m.description}) for m in cal.months],
        "weekdays": [_drop_none({"name": w.name, "abbreviation": w.abbreviation,
                                 "description": w.description}) for w in cal.weekdays],
        "intercalary": [
            _drop_none({
                "name": r.name,
                "after": r.after,
                "days": r.days,
                "leapYearOnly": r.leap_year_only,
                "countsForWeekdays": r.counts_for_weekdays,
                "description": r.description,
            })
            for r in cal.intercalary
        ],
        "time": {
            "hoursInDay": cal.time.hours_per_day,
            "minutesInHour": cal.time.minutes_per_hour,
            "secondsInMinute": cal.time.seconds_per_minute,
        },
    }
    en = out["translations"]["en"]
    if cal.description:
        en["description"] = cal.description
    if cal.setting:
        en["setting"] = cal.setting

    leap = cal.leap_year
    if isinstance(leap, CustomLeapRule):
        out["leapYear"]["interval"] = leap.interval
    if leap.month is not None:
        out["leapYear"]["month"] = leap.month
        out["leapYear"]["extraDays"] = leap.extra_days

    if cal.world_time is not None:
        out["worldTime"] = _drop_none({
            "interpretation": cal.world_time.interpretation.value,
            "epochYear": cal.world_time.epoch_year,
            "currentYear": cal.world_time.current_year,
        })
    return out


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}
