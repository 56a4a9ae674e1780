"""
worldcal.engines.worldtime
--------------------------
worldTime (seconds) <-> CalendarDate with time of day.

Two interpretation policies:
  * epoch-based: worldTime=0 is the first instant of the epoch year.
  * real-time-based: worldTime=0 is the first instant of `current_year`;
    some hosts count worldTime from "now" in the setting rather than from
    the narrative epoch.

The real-time offset is the exact day count of the years between the epoch
and the current year, taken from the calendar's own leap rule.
"""

from __future__ import annotations

import logging

from ..core.time import days_to_seconds, seconds_to_time_of_day, split_world_seconds, time_of_day_to_seconds
from ..core.types import CalendarDate, WorldTimeInterpretation
from .interfaces import ArithmeticCoreProtocol, NumT

logger = logging.getLogger(__name__)


class WorldTimeConverter:
    def __init__(self, core: ArithmeticCoreProtocol):
        self.core = core
        self.cal = core.cal
        self.units = core.cal.time
        self._offset = self._compute_offset()

    def _compute_offset(self) -> int:
        cal = self.cal
        if cal.interpretation is not WorldTimeInterpretation.REAL_TIME_BASED:
            return 0

        wt = cal.world_time
        current_year = wt.current_year if wt.current_year is not None else cal.year.current_year

        # Absolute day index of the first day of current_year, measured from
        # the epoch the arithmetic core is anchored to.
        offset = self.core.days_between_years(cal.year.epoch, current_year)
        logger.debug("Calendar %r: real-time-based offset of %d days (year %d)", cal.id, offset, current_year)
        return offset

    def epoch_offset_days(self) -> int:
        return self._offset

    def world_time_to_date(self, world_time: NumT) -> CalendarDate:
        day_count, seconds_in_day = split_world_seconds(world_time, self.units)
        date = self.core.day_count_to_date(day_count + self._offset)
        return date.replace(time=seconds_to_time_of_day(seconds_in_day, self.units))

    def date_to_world_time(self, date: CalendarDate) -> int:
        days = self.core.date_to_day_count(date) - self._offset
        return days_to_seconds(days, self.units) + time_of_day_to_seconds(date.time, self.units)
