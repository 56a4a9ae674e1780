"""Diagnostics package.

- pretty_month, round_trip: always available, stdlib only
- year_drift: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["pretty_month", "round_trip", "year_drift"]
