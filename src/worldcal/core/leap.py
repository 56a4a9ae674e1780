"""
worldcal.core.leap
------------------
Leap-year rules as a small tagged union. Every rule answers two questions:
is a given year a leap year, and how many leap years fall in a half-open
span of years. The second one lets the arithmetic core jump across
thousands of years without walking them one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


def _multiples_between(k: int, start: int, end: int) -> int:
    """Number of multiples of k in [start, end). Works for negative years."""
    return (end - 1) // k - (start - 1) // k


@dataclass(frozen=True)
class NoLeapRule:
    rule = "none"

    @property
    def month(self) -> Optional[str]:
        return None

    @property
    def extra_days(self) -> int:
        return 0

    def is_leap(self, year: int) -> bool:
        return False

    def count_between(self, start: int, end: int) -> int:
        return 0


@dataclass(frozen=True)
class GregorianLeapRule:
    """Divisible by 4, except centuries unless divisible by 400."""
    rule = "gregorian"

    month: Optional[str] = None
    extra_days: int = 1

    def __post_init__(self) -> None:
        if self.extra_days < 1:
            raise ValueError("extra_days must be positive")

    def is_leap(self, year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    def count_between(self, start: int, end: int) -> int:
        if end <= start:
            return 0
        return (
            _multiples_between(4, start, end)
            - _multiples_between(100, start, end)
            + _multiples_between(400, start, end)
        )


@dataclass(frozen=True)
class CustomLeapRule:
    """
    Every `interval`-th year is a leap year, anchored at year 0
    (so with interval 4 the leap years are ..., -4, 0, 4, 8, ...).
    """
    rule = "custom"

    interval: int
    month: Optional[str] = None
    extra_days: int = 1

    def __post_init__(self) -> None:
        if self.interval < 1:
            raise ValueError("interval must be positive")
        if self.extra_days < 1:
            raise ValueError("extra_days must be positive")

    def is_leap(self, year: int) -> bool:
        return year % self.interval == 0

    def count_between(self, start: int, end: int) -> int:
        if end <= start:
            return 0
        return _multiples_between(self.interval, start, end)


LeapYearRule = Union[NoLeapRule, GregorianLeapRule, CustomLeapRule]
