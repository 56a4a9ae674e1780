from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from .types import CalendarDate, CalendarDefinition

class CalendarEngine(Protocol):
    cal: CalendarDefinition

    @property
    def id(self) -> str: ...
    def info(self) -> Dict[str, Any]: ...
    def world_time_to_date(self, world_time: float) -> CalendarDate: ...
    def date_to_world_time(self, date: CalendarDate) -> int: ...
    def calculate_weekday(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> int: ...
    def add_days(self, date: CalendarDate, n: int) -> CalendarDate: ...
    def add_months(self, date: CalendarDate, n: int) -> CalendarDate: ...
    def add_years(self, date: CalendarDate, n: int) -> CalendarDate: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._engines

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine

    def unregister(self, name: str) -> None:
        self.get(name)
        del self._engines[name]
