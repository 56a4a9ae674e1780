from __future__ import annotations

import argparse

import worldcal


def dow_header(abbrevs: list[str], w: int = 6) -> str:
    return " ".join(a[:w].ljust(w) for a in abbrevs)


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_grid(calendar: str, year: int, month: int) -> list[list[tuple[str, str]]]:
    """
    Lay a month out in weekday columns. Days of a block that stands outside
    the week share the column of the next regular day and are listed on
    their own row, marked with '*'.
    """
    eng = worldcal.get_engine(calendar)
    n = eng.cal.week_length
    days = eng.month_days(year, month)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []

    def flush() -> None:
        nonlocal wk
        if wk:
            while len(wk) < n:
                wk.append(cell("", ""))
            weeks.append(wk)
        wk = []

    for d in days:
        if d.intercalary is not None:
            rule = next(r for r in eng.cal.intercalary if r.name == d.intercalary)
            if not rule.counts_for_weekdays:
                flush()
                row = [cell("", "") for _ in range(n)]
                row[d.weekday] = cell(f"{d.day:2d}*", d.intercalary)
                weeks.append(row)
                continue
            top, bot = f"{d.day:2d}", d.intercalary
        else:
            top, bot = f"{d.day:2d}", ""
        if not wk:
            wk = [cell("", "") for _ in range(d.weekday)]
        wk.append(cell(top, bot))
        if len(wk) == n:
            flush()
    flush()
    return weeks


def print_month(calendar: str, year: int, month: int) -> None:
    eng = worldcal.get_engine(calendar)
    cal = eng.cal
    abbrevs = [w.abbreviation or w.name for w in cal.weekdays]
    title = f"{cal.label or cal.id}  {cal.months[month - 1].name} {cal.year.prefix}{year}{cal.year.suffix}"
    print_grid(title, dow_header(abbrevs), month_grid(calendar, year, month))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print a month as a weekday grid, intercalary days included.")
    p.add_argument("--calendar", default="gregorian", help=f"one of {worldcal.list_calendars()}")
    p.add_argument("--month", nargs=2, type=int, metavar=("Y", "M"), help="Year and month, e.g. 2522 2")
    p.add_argument("--year", type=int, help="Print every month of a year")
    args = p.parse_args(argv)

    eng = worldcal.get_engine(args.calendar)

    if args.year is not None:
        for m in range(1, eng.cal.month_count + 1):
            print_month(args.calendar, args.year, m)
        return 0

    if args.month:
        y, m = args.month
    else:
        # default: first month of the calendar's current year
        y, m = eng.cal.year.current_year, 1
    print_month(args.calendar, y, m)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
