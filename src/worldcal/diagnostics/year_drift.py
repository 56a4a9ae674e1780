#!/usr/bin/env python3
from __future__ import annotations

from typing import Tuple

import argparse

import worldcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "worldcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "worldcal[diagnostics]"') from e


def build_series(np, calendar: str, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray"]:
    """Year numbers, year lengths and weekday of the first day of each year."""
    eng = worldcal.get_engine(calendar)
    years = np.arange(start_year, end_year + 1, dtype=int)
    lengths = np.empty_like(years)
    new_year_wd = np.empty_like(years)
    for i, y in enumerate(years):
        y = int(y)
        lengths[i] = eng.get_year_length(y)
        new_year_wd[i] = eng.month_start_weekday(y, 1)
    return years, lengths, new_year_wd


def mean_drift(np, new_year_wd: "np.ndarray", week_length: int) -> float:
    """Average weekday shift from one new year to the next (mod week length)."""
    if len(new_year_wd) < 2:
        return 0.0
    return float(np.mean(np.diff(new_year_wd) % week_length))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot year length and new-year weekday across a span of years.")
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--start-year", type=int, default=None, help="default: current year - 50")
    p.add_argument("--end-year", type=int, default=None, help="default: current year + 50")
    p.add_argument("--outbase", default="year_drift", help="Output file name without extension.")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    eng = worldcal.get_engine(args.calendar)
    current = eng.cal.year.current_year
    start = args.start_year if args.start_year is not None else current - 50
    end = args.end_year if args.end_year is not None else current + 50
    if end < start:
        raise SystemExit("--end-year must be >= --start-year")

    years, lengths, wd = build_series(np, args.calendar, start, end)

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
    })

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(9.2, 6.0), sharex=True, constrained_layout=True)
    for ax in (ax1, ax2):
        ax.set_axisbelow(True)
        ax.grid(True, which="major", color="0.88", linewidth=0.7)

    ax1.step(years, lengths, where="mid", color="tab:blue", linewidth=1.2)
    ax1.set_ylabel("Days in year")
    ax1.set_title(f"{eng.cal.label or eng.id}: year length and new-year weekday")

    ax2.scatter(years, wd, s=10, c="tab:red", alpha=0.6)
    ax2.set_yticks(range(eng.cal.week_length))
    ax2.set_yticklabels([w.abbreviation or w.name for w in eng.cal.weekdays])
    ax2.set_ylabel("Weekday of day 1")
    ax2.set_xlabel("Year")

    print(f"Mean weekday drift per year: {mean_drift(np, wd, eng.cal.week_length):.4f}")

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=300)
    print(f"Saved: {outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
