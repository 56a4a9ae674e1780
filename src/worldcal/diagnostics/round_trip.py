from __future__ import annotations

import argparse
import random
from typing import List

import worldcal


def parse_calendars(s: str) -> List[str]:
    # "gregorian,warhammer" -> ["gregorian", "warhammer"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    start_year: int,
    end_year: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """worldTime -> date -> worldTime over random instants between two years."""
    random.seed(seed)
    eng = worldcal.get_engine(calendar)
    lo = eng.date_to_world_time(worldcal.CalendarDate(start_year, 1, 1))
    hi = eng.date_to_world_time(worldcal.CalendarDate(end_year + 1, 1, 1)) - 1
    failures = 0

    for _ in range(N):
        t0 = random.randint(lo, hi)
        d = eng.world_time_to_date(t0)
        t1 = eng.date_to_world_time(d)
        wd = eng.calculate_weekday(d.year, d.month, d.day, d.intercalary)

        if t1 != t0 or wd != d.weekday:
            failures += 1
            print("\nFAIL")
            print("calendar:", calendar)
            print("t0:", t0)
            print("date:", d)
            print("t1:", t1)
            print("weekday recomputed:", wd)
            print("day_info(debug=True):", worldcal.day_info(t0, calendar=calendar, debug=True))
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: worldTime -> date -> worldTime.")
    p.add_argument("--calendars", type=str, default=",".join(worldcal.list_calendars()),
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--span", type=int, default=400, help="Years on each side of the calendar's current year.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.span < 0:
        raise SystemExit("--span must be >= 0")

    total_fail = 0
    for name in parse_calendars(args.calendars):
        current = worldcal.get_engine(name).cal.year.current_year
        print(f"Testing {name} ...")
        f = roundtrip_test(
            name, N=args.N, start_year=current - args.span, end_year=current + args.span,
            seed=args.seed, max_failures=args.max_failures,
        )
        total_fail += f

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
