# ==============================================
# Tests for TrendBucketizer
# ==============================================

from datetime import date, datetime, timezone

from form_analytics.analysis import TrendBucketizer


def _at(*args, tz=timezone.utc):
    return datetime(*args, tzinfo=tz)


class TestTrendBucketizer:

    def test_empty_input(self):
        assert TrendBucketizer().bucketize([]) == []

    def test_chronological_across_month_boundary(self, make_submission):
        records = [
            make_submission(submitted_at=_at(2024, 2, 1, 9)),
            make_submission(submitted_at=_at(2024, 1, 31, 15)),
        ]

        points = TrendBucketizer().bucketize(records)

        assert [p.date for p in points] == [date(2024, 1, 31), date(2024, 2, 1)]
        assert [p.count for p in points] == [1, 1]

    def test_chronological_across_year_boundary(self, make_submission):
        records = [
            make_submission(submitted_at=_at(2025, 1, 2, 9)),
            make_submission(submitted_at=_at(2024, 12, 30, 9)),
            make_submission(submitted_at=_at(2024, 1, 2, 9)),
        ]

        points = TrendBucketizer().bucketize(records)

        assert [p.date.isoformat() for p in points] == ["2024-01-02", "2024-12-30", "2025-01-02"]
        # Same "Jan 2" label, different years
        assert points[0].label == points[2].label == "Jan 2"

    def test_counts_per_day(self, make_submission):
        records = [
            make_submission(submitted_at=_at(2024, 3, 1, 0, 5)),
            make_submission(submitted_at=_at(2024, 3, 1, 23, 55)),
            make_submission(submitted_at=_at(2024, 3, 3, 12)),
        ]
        points = TrendBucketizer().bucketize(records)
        assert [(p.date.day, p.count) for p in points] == [(1, 2), (3, 1)]

    def test_naive_timestamps_are_utc(self, make_submission):
        records = [make_submission(submitted_at=datetime(2024, 3, 1, 23, 30))]
        assert TrendBucketizer().bucketize(records)[0].date == date(2024, 3, 1)

    def test_configured_timezone_moves_day_boundary(self, make_submission):
        records = [make_submission(submitted_at=_at(2024, 3, 1, 23, 30))]
        points = TrendBucketizer("Asia/Kolkata").bucketize(records)
        assert points[0].date == date(2024, 3, 2)

    def test_to_dict(self, make_submission):
        point = TrendBucketizer().bucketize([make_submission(submitted_at=_at(2024, 1, 31, 1))])[0]
        assert point.to_dict() == {"date": "2024-01-31", "label": "Jan 31", "count": 1}
