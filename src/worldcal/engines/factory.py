"""
worldcal.engines.factory
------------------------
Transforms pure data calendar definitions into live, executable Engine objects.
"""

from __future__ import annotations

from typing import Any, Dict, Union

from ..core.types import CalendarDefinition
from .arithmetic import ArithmeticCore
from .calendar import CalendarEngine
from .worldtime import WorldTimeConverter

CalendarSource = Union[CalendarDefinition, Dict[str, Any]]


def build_calendar_engine(cal: CalendarDefinition) -> CalendarEngine:
    """Transforms a pure data CalendarDefinition into a live CalendarEngine."""
    # 1. Day arithmetic
    arithmetic = ArithmeticCore(cal)

    # 2. worldTime policy on top of it
    world_time = WorldTimeConverter(arithmetic)

    # 3. Orchestrate
    return CalendarEngine(cal, arithmetic=arithmetic, world_time=world_time)


def make_engine(spec: CalendarSource) -> CalendarEngine:
    """The universal entry point: a CalendarDefinition or a schema dict."""
    if isinstance(spec, CalendarDefinition):
        return build_calendar_engine(spec)
    if isinstance(spec, dict):
        from ..loader import load_calendar
        return build_calendar_engine(load_calendar(spec))
    raise TypeError(f"Unknown calendar source type: {type(spec)}")
