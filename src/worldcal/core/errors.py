from __future__ import annotations

from typing import Iterable, List


class WorldcalError(Exception):
    """Base error."""


class CalendarConfigError(WorldcalError, ValueError):
    """Raised when a calendar definition is malformed (authoring mistake)."""

    def __init__(self, errors: Iterable[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "invalid calendar definition")


class InvalidDateError(WorldcalError, ValueError):
    """Raised when a caller passes a date that does not exist in the calendar."""
