# tests/test_api.py

import json

import pytest

import worldcal
from worldcal import CalendarDate, TimeOfDay
from worldcal.api import _reg
from worldcal.engines.specs import GOLARION, WARHAMMER
from worldcal.loader import dump_calendar


@pytest.fixture
def scratch_calendar():
    """Registers a throwaway calendar and removes it afterwards."""
    data = {
        "id": "scratch",
        "translations": {"en": {"label": "Scratch"}},
        "months": [{"name": "Alpha", "days": 20}, {"name": "Beta", "days": 20}],
        "weekdays": [{"name": "Up"}, {"name": "Down"}],
        "intercalary": [{"name": "Gap", "after": "Alpha", "days": 2, "countsForWeekdays": False}],
    }
    eng = worldcal.register_calendar(data)
    yield eng
    _reg().unregister("scratch")


def test_builtin_calendars_registered():
    assert worldcal.list_calendars() == ["dark-sun", "golarion", "gregorian", "simple-360", "warhammer"]
    info = worldcal.calendar_info("golarion")
    assert info["interpretation"] == "real-time-based"
    assert info["week_length"] == 7


def test_unknown_calendar():
    with pytest.raises(KeyError, match="Available"):
        worldcal.world_time_to_date(0, calendar="discworld")


def test_default_calendar_is_gregorian():
    d = worldcal.world_time_to_date(86400)
    assert d == CalendarDate(2024, 1, 2)
    assert worldcal.date_to_world_time(d) == 86400


def test_calendar_keyword_routes_to_engine():
    d = worldcal.world_time_to_date(0, calendar="golarion")
    assert d.year == 4725
    assert worldcal.is_leap_year(4724, calendar="golarion")
    assert worldcal.get_month_lengths(4724, calendar="golarion")[1] == 29
    assert worldcal.get_year_length(2522, calendar="warhammer") == 400


def test_make_date_fills_weekday_and_validates():
    d = worldcal.make_date(2024, 7, 4, time=(9, 0, 0))
    assert d.weekday == 4
    assert d.time == TimeOfDay(9, 0, 0)
    with pytest.raises(worldcal.InvalidDateError):
        worldcal.make_date(2023, 2, 29)
    with pytest.raises(worldcal.InvalidDateError):
        worldcal.make_date(2024, 1, 1, time=(25, 0, 0))
    with pytest.raises(worldcal.InvalidDateError):
        worldcal.make_date(2522, 1, 1, intercalary="Mitterfruhl", calendar="warhammer")

    blocks = [worldcal.make_date(190, m, 1, intercalary=name, calendar="dark-sun")
              for m, name in ((12, "Highest Sun"), (4, "Cooling Sun"), (8, "Soaring Sun"))]
    assert [b.block for b in blocks] == [1, 1, 1]
    assert sorted(blocks)[0].intercalary == "Cooling Sun"


def test_arithmetic_wrappers():
    d = CalendarDate(2024, 1, 31)
    assert worldcal.add_days(d, 1) == CalendarDate(2024, 2, 1)
    assert worldcal.add_weeks(d, 1) == CalendarDate(2024, 2, 7)
    assert worldcal.add_months(d, 1) == CalendarDate(2024, 2, 29)
    assert worldcal.add_years(d, -1) == CalendarDate(2023, 1, 31)
    assert worldcal.add_hours(d, 25) == CalendarDate(2024, 2, 1, time=TimeOfDay(1, 0, 0))
    assert worldcal.days_between(d, CalendarDate(2024, 3, 1)) == 30
    assert worldcal.calculate_weekday(2024, 1, 1) == 1


def test_month_and_year_info():
    m = worldcal.month_info(2522, 2, calendar="warhammer")
    assert m["name"] == "Jahrdrung"
    assert m["days"] == 33
    assert m["intercalary_after"] == [{"name": "Mitterfruhl", "days": 1, "counts_for_weekdays": False}]

    y = worldcal.year_info(2024)
    assert y["leap"] is True
    assert y["length"] == 366
    assert y["first_day_world_time"] == 0
    assert [mi["days"] for mi in y["months"]][:3] == [31, 29, 31]


def test_month_days_includes_trailing_blocks():
    days = worldcal.month_days(190, 4, calendar="dark-sun")
    assert len(days) == 35
    assert days[-1].intercalary == "Cooling Sun"
    assert days[-1].day == 5


def test_day_info_attributes():
    info = worldcal.day_info(86400 * 59 + 43200, attributes=("names", "day_of_year", "day_progress", "season"))
    assert info.calendar == "gregorian"
    assert info.date == CalendarDate(2024, 2, 29, time=TimeOfDay(12, 0, 0))
    attrs = info.attributes
    assert attrs["month_name"] == "February"
    assert attrs["weekday_name"] == "Thursday"
    assert attrs["year_label"] == "2024 AD"
    assert attrs["day_of_year"] == 60
    assert attrs["year_length"] == 366
    assert attrs["day_progress"] == pytest.approx(0.5)
    assert attrs["season"] == 1


def test_day_info_debug_and_unknown_attribute():
    info = worldcal.day_info(0, calendar="golarion", debug=True)
    assert info.debug["day_count"] == info.debug["epoch_offset_days"]
    with pytest.raises(KeyError):
        worldcal.day_info(0, attributes=("moon_phase",))


def test_register_and_use_custom_calendar(scratch_calendar):
    assert "scratch" in worldcal.list_calendars()
    d = worldcal.add_days(CalendarDate(1, 1, 20), 1, calendar="scratch")
    assert d.intercalary == "Gap"
    assert worldcal.get_year_length(1, calendar="scratch") == 42

    with pytest.raises(KeyError, match="already exists"):
        worldcal.register_calendar(scratch_calendar.cal)
    worldcal.register_calendar(scratch_calendar.cal, overwrite=True)


def test_register_rejects_invalid_definition():
    with pytest.raises(worldcal.CalendarConfigError):
        worldcal.register_calendar({"id": "broken", "months": [], "weekdays": []})
    assert "broken" not in worldcal.list_calendars()


def test_load_calendar_from_file(tmp_path):
    raw = dump_calendar(WARHAMMER)
    raw["id"] = "warhammer-copy"
    path = tmp_path / "wh.json"
    path.write_text(json.dumps(raw), encoding="utf-8")

    eng = worldcal.load_calendar(str(path))
    try:
        assert worldcal.world_time_to_date(86400 * 400, calendar="warhammer-copy") == CalendarDate(1, 1, 1)
        assert eng.cal.tweak(id="warhammer") == WARHAMMER
    finally:
        _reg().unregister("warhammer-copy")


def test_get_calendar_with_overrides():
    eng = worldcal.get_calendar("gregorian", id="gregorian-1970")
    assert eng.id == "gregorian-1970"
    assert "gregorian-1970" not in worldcal.list_calendars()


def test_definition_returns_registered_definition():
    assert worldcal.definition("golarion") is worldcal.get_engine("golarion").cal
    assert worldcal.definition("golarion") == GOLARION
    assert worldcal.definition().id == "gregorian"
    with pytest.raises(KeyError):
        worldcal.definition("discworld")
