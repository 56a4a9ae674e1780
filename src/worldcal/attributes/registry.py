from __future__ import annotations
from typing import TYPE_CHECKING, Any, Callable, Dict, Sequence

from ..core.types import DayInfo

if TYPE_CHECKING:
    from ..engines.calendar import CalendarEngine

AttrFunc = Callable[[DayInfo, "CalendarEngine"], Dict[str, Any]]
_REGISTRY: Dict[str, AttrFunc] = {}

def register_attribute(name: str, fn: AttrFunc) -> None:
    _REGISTRY[name] = fn

def available_attributes() -> list:
    return sorted(_REGISTRY)

def compute_attributes(info: DayInfo, engine: "CalendarEngine", names: Sequence[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in names:
        if name not in _REGISTRY:
            raise KeyError(f"Unknown attribute '{name}'. Available: {sorted(_REGISTRY)}")
        out.update(_REGISTRY[name](info, engine))
    return out

# helper for attribute implementations
def seconds_into_day(info: DayInfo, engine: "CalendarEngine") -> int:
    t = info.date.time
    if t is None:
        return 0
    units = engine.cal.time
    return t.hour * units.seconds_per_hour + t.minute * units.seconds_per_minute + t.second
