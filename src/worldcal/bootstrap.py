from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

from worldcal.core.engine import EngineRegistry
from worldcal.engines.specs import ALL_SPECS
from worldcal.engines.factory import make_engine
from worldcal.loader import load_calendar_file

logger = logging.getLogger(__name__)

# os.pathsep-separated JSON files or directories of *.json calendars
CALENDAR_PATH_ENV = "WORLDCAL_CALENDARS"

def _calendar_files(paths: Iterable[str]) -> Iterator[Path]:
    for entry in paths:
        p = Path(entry).expanduser()
        if p.is_dir():
            yield from sorted(p.glob("*.json"))
        elif p.is_file():
            yield p
        else:
            logger.warning("Calendar path %s does not exist, skipping", p)

def build_registry(paths: Optional[Iterable[str]] = None) -> EngineRegistry:
    engines = {}
    for name, spec in ALL_SPECS.items():
        engines[name] = make_engine(spec)

    if paths is None:
        paths = [s for s in os.environ.get(CALENDAR_PATH_ENV, "").split(os.pathsep) if s]
    # user calendars may replace built-ins of the same id
    for f in _calendar_files(paths):
        eng = make_engine(load_calendar_file(f))
        if eng.id in engines:
            logger.info("Calendar %r from %s replaces the built-in definition", eng.id, f)
        engines[eng.id] = eng

    logger.debug("Built calendar registry: %s", sorted(engines))
    return EngineRegistry(engines)
