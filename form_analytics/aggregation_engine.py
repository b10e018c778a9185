# ==============================================
# AggregationEngine: Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the analysis components together.
#   Callers hand it a form schema plus already-fetched submissions and
#   views, and get back one statistics object. It performs no I/O.
#
# HOW IT CONNECTS THE COMPONENTS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                   AggregationEngine                      │
#   │                                                          │
#   │   raw records (schema, submissions, views)               │
#   │                 │                                        │
#   │                 ├──► GrowthCalculator   (windows)        │
#   │                 ├──► TrendBucketizer    (daily series)   │
#   │                 ├──► FieldAnalyticsCalculator            │
#   │                 │        └── FieldResolver               │
#   │                 └──► DropOffEstimator                    │
#   │                                                          │
#   │                 ▼                                        │
#   │      FormStatistics / DashboardStatistics                │
#   └──────────────────────────────────────────────────────────┘
#
#
# CLASS: AggregationEngine
# ------------------------
#
#   Constructor:
#   ------------
#   - __init__(config: AnalyticsConfig | None = None)
#       Window sizes, drop-off limit and trend timezone come from config.
#
#   Public Methods:
#   ---------------
#   - dashboard_stats(forms, submissions, views=None, now=None) -> DashboardStatistics
#       Totals across a user's forms, 30-day vs previous 30-day growth.
#       `views` may be raw ViewEvents, a {form_id: count} mapping, or None
#       (then FormSummary.view_count is summed).
#
#   - form_stats(schema, submissions, views=None, now=None) -> FormStatistics
#       One form's analytics page, 7-day vs previous 7-day growth.
#       `views` may be raw ViewEvents or a plain count.
#
#   Both methods are pure: the same inputs (and the same `now`) always
#   give the same output.
#
# KNOWN LIMITATION:
#   completion_rate is 100 whenever there is at least one submission.
#   It does not check that every required field was answered.
#
# ==============================================

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from form_analytics.config import AnalyticsConfig, get_config
from form_analytics.normalization import (
    FormSchema,
    FormSummary,
    SubmissionRecord,
    ValueClassifier,
    ViewEvent,
)
from form_analytics.analysis import (
    DashboardStatistics,
    DropOffEstimator,
    FieldAnalyticsCalculator,
    FieldResolver,
    FormStatistics,
    GrowthCalculator,
    TrendBucketizer,
)
from form_analytics.analysis.rounding import percentage, round_one_decimal
from form_analytics.analysis.statistics import NOT_AVAILABLE

logger = logging.getLogger(__name__)

FormViews = Union[Sequence[ViewEvent], int, None]
DashboardViews = Union[Sequence[ViewEvent], Mapping[str, int], None]


class AggregationEngine:
    """
    Computes dashboard-level and form-level statistics from
    already-fetched records.
    """

    def __init__(self, config: Optional[AnalyticsConfig] = None):
        """
        Initialize the engine and its components.

        Args:
            config: Analytics configuration. If None, loads from environment.
        """
        self._config = config or get_config().analytics

        self._resolver = FieldResolver()
        self._field_calculator = FieldAnalyticsCalculator(self._resolver)
        self._drop_off_estimator = DropOffEstimator(self._config.max_drop_off_points)
        self._trend_bucketizer = TrendBucketizer(self._config.timezone)
        self._growth = GrowthCalculator()

    # ======================================
    # Dashboard level
    # ======================================
    def dashboard_stats(
        self,
        forms: Sequence[FormSummary],
        submissions: Sequence[SubmissionRecord],
        views: DashboardViews = None,
        now: Optional[datetime] = None,
    ) -> DashboardStatistics:
        """
        Compute totals across all of a user's forms.

        Args:
            forms: The user's forms
            submissions: Submissions; those belonging to other forms are ignored
            views: Raw view events, a per-form view counter, or None to use
                   FormSummary.view_count
            now: Reference time for growth windows (defaults to current UTC time)

        Returns:
            DashboardStatistics
        """
        now = self._now(now)
        window = self._config.dashboard_window_days
        form_ids = {form.id for form in forms}

        # Step 1: Restrict records to the given forms
        own_submissions = [
            record for record in submissions
            if record.form_id is None or record.form_id in form_ids
        ]
        view_events, total_views = self._dashboard_views(forms, form_ids, views)

        total_submissions = len(own_submissions)

        # Step 2: Growth (trailing window vs the one before it)
        forms_growth = self._growth.growth_in_windows(
            (form.created_at for form in forms), now, window
        )
        submissions_growth = self._growth.growth_in_windows(
            (record.submitted_at for record in own_submissions), now, window
        )
        views_growth, conversion_growth = self._view_growths(
            own_submissions, view_events, now, window
        )

        return DashboardStatistics(
            total_forms=len(forms),
            total_submissions=total_submissions,
            total_views=total_views,
            conversion_rate=self._conversion_rate(total_submissions, total_views),
            forms_growth=forms_growth,
            submissions_growth=submissions_growth,
            views_growth=views_growth,
            conversion_growth=conversion_growth,
        )

    # ======================================
    # Form level
    # ======================================
    def form_stats(
        self,
        schema: FormSchema,
        submissions: Sequence[SubmissionRecord],
        views: FormViews = None,
        now: Optional[datetime] = None,
    ) -> FormStatistics:
        """
        Compute the analytics page for one form.

        Args:
            schema: The form's current schema
            submissions: All submissions of the form
            views: Raw view events or a plain view count
            now: Reference time for growth windows (defaults to current UTC time)

        Returns:
            FormStatistics
        """
        now = self._now(now)
        window = self._config.form_window_days

        view_events, total_views = self._form_views(views)
        total_submissions = len(submissions)

        # Step 1: Totals and rates
        conversion_rate = self._conversion_rate(total_submissions, total_views)
        completion_rate = 100.0 if total_submissions > 0 else 0.0

        # Step 2: Growth
        submissions_growth = self._growth.growth_in_windows(
            (record.submitted_at for record in submissions), now, window
        )
        views_growth, conversion_growth = self._view_growths(
            submissions, view_events, now, window
        )
        completion_time_growth = self._completion_time_growth(submissions, now, window)

        # Step 3: Breakdowns
        trend = self._trend_bucketizer.bucketize(submissions)
        field_stats = self._field_calculator.analyze_all(schema, submissions)
        drop_off_points = self._drop_off_estimator.estimate(schema, submissions)

        logger.debug(
            "Form %s: %d submissions, %d views, %d fields analyzed",
            schema.id, total_submissions, total_views, len(field_stats),
        )

        return FormStatistics(
            total_submissions=total_submissions,
            total_views=total_views,
            conversion_rate=conversion_rate,
            completion_rate=completion_rate,
            average_completion_time=self.format_completion_time(
                self.average_completion_seconds(submissions)
            ),
            submissions_growth=submissions_growth,
            views_growth=views_growth,
            conversion_growth=conversion_growth,
            completion_time_growth=completion_time_growth,
            trend=trend,
            field_stats=field_stats,
            drop_off_points=drop_off_points,
        )

    # ======================================
    # Completion time
    # ======================================
    @staticmethod
    def average_completion_seconds(records: Iterable[SubmissionRecord]) -> Optional[float]:
        """
        Mean of the positive completion times, or None if there are none.
        """
        times = [
            record.completion_time_seconds
            for record in records
            if record.completion_time_seconds is not None and record.completion_time_seconds > 0
        ]
        if not times:
            return None
        return sum(times) / len(times)

    @staticmethod
    def format_completion_time(seconds: Optional[float]) -> str:
        """Format seconds as "<minutes>m <seconds>s" ("N/A" when unknown)."""
        if seconds is None or seconds <= 0:
            return NOT_AVAILABLE
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"

    # ======================================
    # Internal helpers
    # ======================================
    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(timezone.utc)
        return ValueClassifier.parse_timestamp(now)

    @staticmethod
    def _conversion_rate(submissions: int, views: int) -> float:
        # More submissions than tracked views still reports at most 100%
        return round_one_decimal(min(percentage(submissions, views), 100.0))

    @staticmethod
    def _form_views(views: FormViews) -> Tuple[Optional[List[ViewEvent]], int]:
        """Return (raw events or None, total view count)."""
        if views is None:
            return None, 0
        if isinstance(views, int):
            return None, max(views, 0)
        events = list(views)
        return events, len(events)

    @staticmethod
    def _dashboard_views(
        forms: Sequence[FormSummary],
        form_ids: set,
        views: DashboardViews,
    ) -> Tuple[Optional[List[ViewEvent]], int]:
        """Return (raw events or None, total view count) for the given forms."""
        if views is None:
            return None, sum(form.view_count or 0 for form in forms)
        if isinstance(views, Mapping):
            return None, sum(max(int(count), 0) for form_id, count in views.items() if form_id in form_ids)
        events = [event for event in views if event.form_id in form_ids]
        return events, len(events)

    def _view_growths(
        self,
        submissions: Sequence[SubmissionRecord],
        view_events: Optional[List[ViewEvent]],
        now: datetime,
        window: int,
    ) -> Tuple[float, float]:
        """
        Views growth and conversion growth over the same windows.

        Both are 0 when only a view counter is available, since a counter
        carries no history.
        """
        if view_events is None:
            return 0.0, 0.0

        views_now, views_before = self._growth.count_in_windows(
            (event.timestamp for event in view_events), now, window
        )
        subs_now, subs_before = self._growth.count_in_windows(
            (record.submitted_at for record in submissions), now, window
        )

        views_growth = self._growth.growth(views_now, views_before)
        conversion_growth = self._growth.growth(
            self._conversion_rate(subs_now, views_now),
            self._conversion_rate(subs_before, views_before),
        )
        return views_growth, conversion_growth

    def _completion_time_growth(
        self,
        submissions: Sequence[SubmissionRecord],
        now: datetime,
        window: int,
    ) -> float:
        current_start, previous_start = self._growth.window_bounds(now, window)
        current: List[SubmissionRecord] = []
        previous: List[SubmissionRecord] = []
        for record in submissions:
            submitted_at = ValueClassifier.parse_timestamp(record.submitted_at)
            if submitted_at >= current_start:
                current.append(record)
            elif submitted_at >= previous_start:
                previous.append(record)

        current_avg = self.average_completion_seconds(current)
        previous_avg = self.average_completion_seconds(previous)
        if current_avg is None or previous_avg is None:
            return 0.0
        return self._growth.growth(current_avg, previous_avg)
