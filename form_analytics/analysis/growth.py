# ==============================================
# GrowthCalculator
# ==============================================
#
# PURPOSE:
#   Period-over-period change, as a signed percentage.
#
# RULE:
# -----
#   previous > 0              → (current - previous) / previous * 100
#   previous == 0, current > 0 → 100   (growth from zero is reported as 100)
#   both zero                 → 0
#   Result is rounded to one decimal.
#
# WINDOWS:
# --------
#   "current"  = [now - window, ...)          (later timestamps included)
#   "previous" = [now - 2 * window, now - window)
#
# ==============================================

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from form_analytics.normalization import ValueClassifier
from .rounding import round_one_decimal


class GrowthCalculator:
    """Signed percentage change between two equal-length periods."""

    @staticmethod
    def growth(current: float, previous: float) -> float:
        if previous > 0:
            return round_one_decimal((current - previous) / previous * 100)
        if current > 0:
            return 100.0
        return 0.0

    @staticmethod
    def window_bounds(now: datetime, window_days: int) -> Tuple[datetime, datetime]:
        """Return (start of current window, start of previous window)."""
        current_start = now - timedelta(days=window_days)
        previous_start = now - timedelta(days=2 * window_days)
        return current_start, previous_start

    @classmethod
    def split_windows(
        cls,
        timestamps: Iterable[Optional[datetime]],
        now: datetime,
        window_days: int,
    ) -> Tuple[List[datetime], List[datetime]]:
        """
        Split timestamps into the current and previous windows.

        Timestamps older than both windows, and None, are dropped.
        Naive values are read as UTC.
        """
        now = ValueClassifier.parse_timestamp(now)
        current_start, previous_start = cls.window_bounds(now, window_days)
        current: List[datetime] = []
        previous: List[datetime] = []

        for raw in timestamps:
            timestamp = ValueClassifier.parse_timestamp(raw)
            if timestamp is None:
                continue
            if timestamp >= current_start:
                current.append(timestamp)
            elif timestamp >= previous_start:
                previous.append(timestamp)

        return current, previous

    @classmethod
    def count_in_windows(
        cls,
        timestamps: Iterable[Optional[datetime]],
        now: datetime,
        window_days: int,
    ) -> Tuple[int, int]:
        current, previous = cls.split_windows(timestamps, now, window_days)
        return len(current), len(previous)

    @classmethod
    def growth_in_windows(
        cls,
        timestamps: Iterable[Optional[datetime]],
        now: datetime,
        window_days: int,
    ) -> float:
        current, previous = cls.count_in_windows(timestamps, now, window_days)
        return cls.growth(current, previous)


def growth(current: float, previous: float) -> float:
    return GrowthCalculator.growth(current, previous)
