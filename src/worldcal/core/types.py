from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from functools import total_ordering
from typing import Any, Dict, Optional, Tuple

from .errors import CalendarConfigError
from .leap import LeapYearRule, NoLeapRule


@dataclass(frozen=True)
class Month:
    name: str
    days: int
    abbreviation: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.days < 1:
            raise ValueError(f"Month '{self.name}' must have at least one day")


@dataclass(frozen=True)
class Weekday:
    name: str
    abbreviation: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class YearConfig:
    epoch: int = 0
    current_year: int = 1
    start_day: int = 0
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class IntercalaryRule:
    """A block of days inserted after the month named by `after`."""
    name: str
    after: str
    days: int = 1
    leap_year_only: bool = False
    counts_for_weekdays: bool = True
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.days < 1:
            raise ValueError(f"Intercalary period '{self.name}' must have at least one day")


@dataclass(frozen=True)
class TimeUnits:
    hours_per_day: int = 24
    minutes_per_hour: int = 60
    seconds_per_minute: int = 60

    def __post_init__(self) -> None:
        if min(self.hours_per_day, self.minutes_per_hour, self.seconds_per_minute) < 1:
            raise ValueError("time units must be positive")

    @property
    def seconds_per_hour(self) -> int:
        return self.minutes_per_hour * self.seconds_per_minute

    @property
    def seconds_per_day(self) -> int:
        return self.hours_per_day * self.seconds_per_hour


class WorldTimeInterpretation(str, enum.Enum):
    EPOCH_BASED = "epoch-based"
    REAL_TIME_BASED = "real-time-based"


@dataclass(frozen=True)
class WorldTimeConfig:
    """
    What worldTime=0 means. Epoch-based: first instant of the year epoch.
    Real-time-based: first instant of `current_year`.

    `epoch_year` is informational only. Day 0 is always anchored at
    `YearConfig.epoch`; the loader warns once when the two disagree.
    """
    interpretation: WorldTimeInterpretation = WorldTimeInterpretation.EPOCH_BASED
    epoch_year: Optional[int] = None
    current_year: Optional[int] = None


@dataclass(frozen=True)
class CalendarDefinition:
    """Validated, immutable description of a calendar system."""
    id: str
    months: Tuple[Month, ...]
    weekdays: Tuple[Weekday, ...]
    year: YearConfig = field(default_factory=YearConfig)
    leap_year: LeapYearRule = field(default_factory=NoLeapRule)
    intercalary: Tuple[IntercalaryRule, ...] = ()
    time: TimeUnits = field(default_factory=TimeUnits)
    world_time: Optional[WorldTimeConfig] = None
    label: str = ""
    description: Optional[str] = None
    setting: Optional[str] = None

    def __post_init__(self) -> None:
        # Normalize list inputs so the definition stays hashable and immutable.
        object.__setattr__(self, "months", tuple(self.months))
        object.__setattr__(self, "weekdays", tuple(self.weekdays))
        object.__setattr__(self, "intercalary", tuple(self.intercalary))

        if not self.months:
            raise CalendarConfigError("calendar must have at least one month")
        if not self.weekdays:
            raise CalendarConfigError("calendar must have at least one weekday")
        if not (0 <= self.year.start_day < len(self.weekdays)):
            raise CalendarConfigError(f"start_day must be in 0..{len(self.weekdays) - 1}")

        names = [m.name for m in self.months]
        if len(set(names)) != len(names):
            raise CalendarConfigError("month names must be unique")
        if self.leap_year.month is not None and self.leap_year.month not in names:
            raise CalendarConfigError(f"leap year month '{self.leap_year.month}' does not exist")
        for rule in self.intercalary:
            if rule.after not in names:
                raise CalendarConfigError(f"intercalary period '{rule.name}' follows unknown month '{rule.after}'")

    @property
    def month_count(self) -> int:
        return len(self.months)

    @property
    def week_length(self) -> int:
        return len(self.weekdays)

    @property
    def interpretation(self) -> WorldTimeInterpretation:
        if self.world_time is None:
            return WorldTimeInterpretation.EPOCH_BASED
        return self.world_time.interpretation

    def month_index(self, name: str) -> int:
        """1-based index of the month called `name`."""
        for i, m in enumerate(self.months, start=1):
            if m.name == name:
                return i
        raise KeyError(f"Unknown month '{name}'. Available: {[m.name for m in self.months]}")

    def tweak(self, **kwargs) -> "CalendarDefinition":
        return replace(self, **kwargs)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.hour, self.minute, self.second)


MIDNIGHT = TimeOfDay()


@total_ordering
@dataclass(frozen=True, eq=False)
class CalendarDate:
    """
    A structured date. For intercalary dates `month` is the month the block
    follows and `day` is the 1-based index inside the block.

    `weekday` is derived by the engine and ignored by equality, hashing and
    ordering. A missing `time` means the start of the day.

    `block` is the 1-based declaration position of the intercalary block
    among those following `month`; the engine fills it in. It orders several
    blocks after one month in walk order and is ignored by equality. Dates
    built by hand leave it at 0, and their blocks fall back to name order.
    """
    year: int
    month: int
    day: int
    weekday: int = 0
    intercalary: Optional[str] = None
    time: Optional[TimeOfDay] = None
    block: int = field(default=0, compare=False)

    @property
    def is_intercalary(self) -> bool:
        return self.intercalary is not None

    def _key(self) -> Tuple[Any, ...]:
        t = self.time or MIDNIGHT
        return (self.year, self.month, self.intercalary or "", self.day, t.as_tuple())

    def _order_key(self) -> Tuple[Any, ...]:
        t = self.time or MIDNIGHT
        # Regular days sort before the intercalary blocks that follow their month.
        return (
            self.year,
            self.month,
            1 if self.intercalary is not None else 0,
            self.block if self.intercalary is not None else 0,
            self.intercalary or "",
            self.day,
            t.as_tuple(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "CalendarDate") -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash(self._key())

    def same_day(self, other: "CalendarDate") -> bool:
        """Date-only equality (time of day ignored)."""
        return self._key()[:4] == other._key()[:4]

    def replace(self, **changes) -> "CalendarDate":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "weekday": self.weekday,
        }
        if self.intercalary is not None:
            out["intercalary"] = self.intercalary
            if self.block:
                out["block"] = self.block
        if self.time is not None:
            out["time"] = {"hour": self.time.hour, "minute": self.time.minute, "second": self.time.second}
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDate":
        t = data.get("time")
        return cls(
            year=int(data["year"]),
            month=int(data["month"]),
            day=int(data["day"]),
            weekday=int(data.get("weekday", 0)),
            intercalary=data.get("intercalary") or None,
            time=TimeOfDay(int(t.get("hour", 0)), int(t.get("minute", 0)), int(t.get("second", 0))) if t else None,
            block=int(data.get("block", 0)),
        )


@dataclass(frozen=True)
class DayInfo:
    world_time: int
    calendar: str
    date: CalendarDate
    attributes: Optional[Dict[str, Any]] = None
    debug: Optional[Dict[str, Any]] = None
