from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys


_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _load_extra(paths: list[str]) -> None:
    import worldcal

    for path in paths:
        worldcal.load_calendar(path, overwrite=True)


def format_date(date, cal) -> str:
    """Human label, e.g. 'Festag, 5 Vorhexen 2522 IC 08:00:00'."""
    year = f"{cal.year.prefix}{date.year}{cal.year.suffix}"
    wd = cal.weekdays[date.weekday].name
    if date.intercalary is not None:
        label = f"{date.intercalary} {date.day} (after {cal.months[date.month - 1].name}) {year}"
    else:
        label = f"{wd}, {date.day} {cal.months[date.month - 1].name} {year}"
    if date.time is not None:
        t = date.time
        label += f" {t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    return label


def cmd_date(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal date", description="worldTime (seconds) -> calendar date")
    p.add_argument("world_time", type=float)
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--load", action="append", default=[], help="calendar JSON file to register first (repeatable)")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    p.add_argument("--debug", action="store_true")
    p.add_argument("--json", action="store_true", help="print the date as JSON")
    args = p.parse_args(argv)

    _load_extra(args.load)
    info = worldcal.day_info(args.world_time, calendar=args.calendar, attributes=tuple(args.attr), debug=args.debug)
    if args.json:
        out = {"world_time": info.world_time, "calendar": info.calendar, "date": info.date.to_dict()}
        if info.attributes:
            out["attributes"] = info.attributes
        if info.debug:
            out["debug"] = info.debug
        print(json.dumps(out, indent=2))
        return 0

    cal = worldcal.get_engine(args.calendar).cal
    print(format_date(info.date, cal))
    for k, v in (info.attributes or {}).items():
        print(f"  {k}: {v}")
    for k, v in (info.debug or {}).items():
        print(f"  [debug] {k}: {v}")
    return 0


def cmd_time(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal time", description="Calendar date -> worldTime (seconds)")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--intercalary", default=None, help="name of the intercalary block (day is 1-based inside it)")
    p.add_argument("--hour", type=int, default=0)
    p.add_argument("--minute", type=int, default=0)
    p.add_argument("--second", type=int, default=0)
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--load", action="append", default=[], help="calendar JSON file to register first (repeatable)")
    args = p.parse_args(argv)

    _load_extra(args.load)
    try:
        d = worldcal.make_date(
            args.year, args.month, args.day,
            intercalary=args.intercalary,
            time=(args.hour, args.minute, args.second),
            calendar=args.calendar,
        )
    except worldcal.InvalidDateError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(worldcal.date_to_world_time(d, calendar=args.calendar))
    return 0


def cmd_list(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal list", description="List registered calendars")
    p.add_argument("--load", action="append", default=[], help="calendar JSON file to register first (repeatable)")
    args = p.parse_args(argv)

    _load_extra(args.load)
    for name in worldcal.list_calendars():
        info = worldcal.calendar_info(name)
        print(f"{name:12s} {info['label'] or ''}  ({info['months']} months, {info['week_length']}-day week, "
              f"{info['interpretation']})")
    return 0


def cmd_year(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal year", description="Summary of one calendar year")
    p.add_argument("year", type=int)
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--load", action="append", default=[], help="calendar JSON file to register first (repeatable)")
    args = p.parse_args(argv)

    _load_extra(args.load)
    cal = worldcal.get_engine(args.calendar).cal
    info = worldcal.year_info(args.year, calendar=args.calendar)
    leap = " (leap year)" if info["leap"] else ""
    print(f"{cal.label or cal.id}  {cal.year.prefix}{args.year}{cal.year.suffix}: {info['length']} days{leap}")
    print(f"  worldTime of day 1: {info['first_day_world_time']}")
    for m in info["months"]:
        wd = cal.weekdays[m["first_weekday"]].name
        print(f"  {m['month']:2d} {m['name']:14s} {m['days']:3d} days  starts on {wd}")
        for block in m["intercalary_after"]:
            tag = "" if block["counts_for_weekdays"] else ", outside the week"
            print(f"     + {block['name']} ({block['days']} day{'s' if block['days'] != 1 else ''}{tag})")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `worldcal 86400 ...`
    if argv and _NUMBER_RE.match(argv[0]):
        return cmd_date(argv)

    p = argparse.ArgumentParser(prog="worldcal", description="Fantasy calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("date", help="worldTime -> calendar date")
    sub.add_parser("time", help="calendar date -> worldTime")
    sub.add_parser("list", help="List registered calendars")
    sub.add_parser("year", help="Year summary: months, leap days, intercalary blocks")

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month as a weekday grid (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "year-drift"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    _configure_logging(args.verbose)

    if args.cmd == "date":
        return cmd_date(rest)

    if args.cmd == "time":
        return cmd_time(rest)

    if args.cmd == "list":
        return cmd_list(rest)

    if args.cmd == "year":
        return cmd_year(rest)

    if args.cmd == "pretty-month":
        return _run_module_main("worldcal.diagnostics.pretty_month", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "worldcal.diagnostics.round_trip",
            "year-drift": "worldcal.diagnostics.year_drift",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
