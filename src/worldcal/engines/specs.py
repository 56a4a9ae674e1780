from __future__ import annotations

from typing import Dict, Tuple

from ..core.leap import CustomLeapRule, GregorianLeapRule, NoLeapRule
from ..core.types import (
    CalendarDefinition,
    IntercalaryRule,
    Month,
    Weekday,
    WorldTimeConfig,
    WorldTimeInterpretation,
    YearConfig,
)


def _months(*pairs: Tuple[str, int]) -> Tuple[Month, ...]:
    return tuple(Month(name, days, abbreviation=name[:3]) for name, days in pairs)


def _weekdays(*names: str) -> Tuple[Weekday, ...]:
    return tuple(Weekday(n, abbreviation=n[:2]) for n in names)


# ============================================================
# GREGORIAN
# ============================================================

GREGORIAN = CalendarDefinition(
    id="gregorian",
    label="Gregorian Calendar",
    description="Standard Earth calendar",
    setting="Earth",
    months=_months(
        ("January", 31), ("February", 28), ("March", 31), ("April", 30),
        ("May", 31), ("June", 30), ("July", 31), ("August", 31),
        ("September", 30), ("October", 31), ("November", 30), ("December", 31),
    ),
    weekdays=_weekdays("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    # 2024-01-01 was a Monday.
    year=YearConfig(epoch=2024, current_year=2024, start_day=1, suffix=" AD"),
    leap_year=GregorianLeapRule(month="February"),
)


# ============================================================
# WARHAMMER (Imperial Calendar)
# ============================================================

WARHAMMER = CalendarDefinition(
    id="warhammer",
    label="Imperial Calendar",
    description="Calendar of the Empire; festival days stand outside the week",
    setting="Warhammer Fantasy",
    months=_months(
        ("Nachexen", 32), ("Jahrdrung", 33), ("Pflugzeit", 33), ("Sigmarzeit", 33),
        ("Sommerzeit", 33), ("Vorgeheim", 33), ("Nachgeheim", 32), ("Erntezeit", 33),
        ("Brauzeit", 33), ("Kaldezeit", 33), ("Ulriczeit", 33), ("Vorhexen", 33),
    ),
    weekdays=_weekdays("Wellentag", "Aubentag", "Marktag", "Backertag",
                       "Bezahltag", "Konistag", "Angestag", "Festag"),
    year=YearConfig(epoch=0, current_year=2522, start_day=0, suffix=" IC"),
    intercalary=tuple(
        IntercalaryRule(name, after, counts_for_weekdays=False)
        for name, after in (
            ("Hexenstag", "Vorhexen"),
            ("Mitterfruhl", "Jahrdrung"),
            ("Sonnstill", "Sommerzeit"),
            ("Geheimnistag", "Vorgeheim"),
            ("Mittherbst", "Erntezeit"),
            ("Mondstille", "Ulriczeit"),
        )
    ),
)


# ============================================================
# GOLARION (Absalom Reckoning); worldTime counts from the current year
# ============================================================

GOLARION = CalendarDefinition(
    id="golarion",
    label="Absalom Reckoning",
    setting="Pathfinder",
    months=_months(
        ("Abadius", 31), ("Calistril", 28), ("Pharast", 31), ("Gozran", 30),
        ("Desnus", 31), ("Sarenith", 30), ("Erastus", 31), ("Arodus", 31),
        ("Rova", 30), ("Lamashan", 31), ("Neth", 30), ("Kuthona", 31),
    ),
    weekdays=_weekdays("Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday"),
    year=YearConfig(epoch=2700, current_year=4725, start_day=6, suffix=" AR"),
    leap_year=CustomLeapRule(interval=4, month="Calistril", extra_days=1),
    world_time=WorldTimeConfig(
        interpretation=WorldTimeInterpretation.REAL_TIME_BASED,
        epoch_year=2700,
        current_year=4725,
    ),
)


# ============================================================
# DARK SUN (Athasian calendar)
# ============================================================

DARK_SUN = CalendarDefinition(
    id="dark-sun",
    label="Athasian Calendar",
    setting="Dark Sun",
    months=_months(
        ("Scorch", 30), ("Morrow", 30), ("Rest", 30), ("Gather", 30),
        ("Breeze", 30), ("Mist", 30), ("Bloom", 30), ("Haze", 30),
        ("Hoard", 30), ("Wind", 30), ("Sorrow", 30), ("Smolder", 30),
    ),
    weekdays=tuple(Weekday(f"{i} Day") for i in range(1, 7)),
    year=YearConfig(epoch=0, current_year=190, start_day=0, prefix="KY "),
    intercalary=(
        IntercalaryRule("Cooling Sun", "Gather", days=5, counts_for_weekdays=False),
        IntercalaryRule("Soaring Sun", "Haze", days=5, counts_for_weekdays=False),
        IntercalaryRule("Highest Sun", "Smolder", days=5, counts_for_weekdays=False),
    ),
)


# ============================================================
# SIMPLE 360 (twelve even months, no leap years)
# ============================================================

SIMPLE_360 = CalendarDefinition(
    id="simple-360",
    label="Simple 360-day Calendar",
    months=tuple(Month(f"Month {i}", 30) for i in range(1, 13)),
    weekdays=_weekdays("Firstday", "Secondday", "Thirdday", "Fourthday", "Fifthday"),
    year=YearConfig(epoch=1, current_year=1),
    leap_year=NoLeapRule(),
)


ALL_SPECS: Dict[str, CalendarDefinition] = {
    "gregorian": GREGORIAN,
    "warhammer": WARHAMMER,
    "golarion": GOLARION,
    "dark-sun": DARK_SUN,
    "simple-360": SIMPLE_360,
}


def like(name: str) -> CalendarDefinition:
    """A built-in definition to start a variant from (use .tweak(...))."""
    if name not in ALL_SPECS:
        raise KeyError(f"Unknown base calendar '{name}'. Available: {sorted(ALL_SPECS)}")
    return ALL_SPECS[name]
