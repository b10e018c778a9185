# ==============================================
# TrendBucketizer
# ==============================================
#
# PURPOSE:
#   Turn submission timestamps into a daily time series for charts
#   and exports.
#
# DAY BOUNDARY POLICY:
#   Timestamps are converted to the configured analytics timezone
#   (default UTC) and bucketed by that local calendar date. Naive
#   timestamps are treated as UTC.
#
# CLASS: TrendBucketizer
# ----------------------
#   Constructor:
#   ------------
#   - __init__(timezone_name: str = "UTC")
#
#   Methods:
#   --------
#   - bucketize(records) -> list[TrendPoint]
#       One point per day with at least one submission, ascending by
#       actual date. Empty input → empty list.
#
#   - local_date(timestamp) -> date
#
# ==============================================

from collections import Counter
from datetime import date, datetime, timezone
from typing import Iterable, List
from zoneinfo import ZoneInfo

from form_analytics.normalization import SubmissionRecord
from .statistics import TrendPoint


class TrendBucketizer:
    """Groups submissions into calendar-day buckets."""

    def __init__(self, timezone_name: str = "UTC"):
        # UTC needs no tz database
        if timezone_name.upper() == "UTC":
            self.timezone = timezone.utc
        else:
            self.timezone = ZoneInfo(timezone_name)

    def bucketize(self, records: Iterable[SubmissionRecord]) -> List[TrendPoint]:
        """
        Count submissions per calendar day.

        Args:
            records: Submissions in any order

        Returns:
            TrendPoints sorted by date, oldest first
        """
        counts = Counter(self.local_date(record.submitted_at) for record in records)
        # Sort on the date itself, never on a "Jan 31" style label
        return [TrendPoint(date=day, count=counts[day]) for day in sorted(counts)]

    def local_date(self, timestamp: datetime) -> date:
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return timestamp.astimezone(self.timezone).date()
