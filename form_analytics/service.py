"""
==============================================
Analytics Service
==============================================

This module wires a record store to the AggregationEngine: it fetches
a form's schema, submissions and views, then asks the engine for
statistics. If the inputs cannot be fetched, the all-zero statistics
object is returned instead of an error.

USAGE EXAMPLES:

1. Form analytics page:
    from form_analytics.service import AnalyticsService
    from form_analytics.storage import MongoFormStore

    with MongoFormStore.from_config(config.mongo, config.collections) as store:
        service = AnalyticsService(store)
        stats = service.form_statistics("form-123")
        print(stats.to_dict())

2. Dashboard totals:
    stats = service.dashboard_statistics("user-42")

3. Export responses:
    csv_text = service.export_responses("form-123", "csv")

4. Export per-field analytics:
    xlsx_bytes = service.export_field_stats("form-123", "xlsx")
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from pymongo.errors import PyMongoError

from form_analytics import export
from form_analytics.aggregation_engine import AggregationEngine
from form_analytics.analysis import DashboardStatistics, FormStatistics
from form_analytics.errors import ExportError, StoreError

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "xlsx", "json")


class AnalyticsService:
    """
    Fetches inputs from a store and hands them to the engine.

    `store` is anything with the MongoFormStore read methods:
    get_form, get_user_forms, get_submissions, get_views, count_views.
    """

    def __init__(
        self,
        store,
        engine: Optional[AggregationEngine] = None,
        use_view_counter: bool = False,
    ):
        """
        Initialize the service.

        Args:
            store: Record store (connected)
            engine: Optional engine. If None, one is built from environment config.
            use_view_counter: Read per-form view counters instead of raw view
                              events. Counters are cheaper but carry no history,
                              so views/conversion growth will be 0.
        """
        self._store = store
        self._engine = engine or AggregationEngine()
        self._use_view_counter = use_view_counter

    def form_statistics(self, form_id: str) -> FormStatistics:
        """
        Compute statistics for one form.

        Returns:
            FormStatistics, or FormStatistics.empty() if fetching failed
        """
        try:
            schema, submissions, views = self._fetch_form_inputs(form_id)
        except (StoreError, PyMongoError):
            logger.exception("Error fetching form stats for %s", form_id)
            return FormStatistics.empty()

        return self._engine.form_stats(schema, submissions, views)

    def _fetch_form_inputs(self, form_id: str):
        schema = self._store.get_form(form_id)
        submissions = self._store.get_submissions([form_id])
        if self._use_view_counter:
            views = self._store.count_views([form_id]).get(form_id, 0)
        else:
            views = self._store.get_views([form_id])
        return schema, submissions, views

    def dashboard_statistics(self, user_id: str) -> DashboardStatistics:
        """
        Compute dashboard totals for every form a user owns.

        Returns:
            DashboardStatistics, or DashboardStatistics.empty() if fetching failed
        """
        try:
            forms = self._store.get_user_forms(user_id)
            form_ids = [form.id for form in forms]
            submissions = self._store.get_submissions(form_ids)
            if self._use_view_counter:
                views = self._store.count_views(form_ids)
            else:
                views = self._store.get_views(form_ids)
        except (StoreError, PyMongoError):
            logger.exception("Error fetching dashboard stats for %s", user_id)
            return DashboardStatistics.empty()

        return self._engine.dashboard_stats(forms, submissions, views)

    def export_responses(
        self,
        form_id: str,
        fmt: str = "csv",
        selected_fields: Optional[Sequence[str]] = None,
    ) -> Union[str, bytes, Dict[str, Any]]:
        """
        Export a form's submissions.

        Args:
            form_id: The form to export
            fmt: "csv", "xlsx" or "json"
            selected_fields: Compacted column keys to keep (None keeps all)

        Returns:
            CSV text, XLSX bytes or a JSON-ready dict

        Raises:
            ExportError: Unsupported format, fetch failure, or no submissions
        """
        if fmt not in EXPORT_FORMATS:
            raise ExportError(f"Unsupported format: {fmt}")

        try:
            submissions = self._store.get_submissions([form_id])
        except (StoreError, PyMongoError) as e:
            logger.exception("Error fetching submissions for export of %s", form_id)
            raise ExportError(f"Failed to fetch submissions for {form_id}") from e

        rows: List[Dict[str, Any]] = export.submission_rows(submissions, selected_fields)
        if not rows:
            raise ExportError(f"No submissions found for {form_id}")

        return self._write(rows, fmt, "Form Responses")

    def export_field_stats(
        self,
        form_id: str,
        fmt: str = "csv",
    ) -> Union[str, bytes, Dict[str, Any]]:
        """
        Export a form's per-field analytics (distributions, average lengths).

        Raises:
            ExportError: Unsupported format, fetch failure, or a form without fields
        """
        if fmt not in EXPORT_FORMATS:
            raise ExportError(f"Unsupported format: {fmt}")

        try:
            schema, submissions, views = self._fetch_form_inputs(form_id)
        except (StoreError, PyMongoError) as e:
            logger.exception("Error fetching field stats for export of %s", form_id)
            raise ExportError(f"Failed to fetch analytics inputs for {form_id}") from e

        statistics = self._engine.form_stats(schema, submissions, views)
        rows = export.field_stats_rows(statistics)
        if not rows:
            raise ExportError(f"Form {form_id} has no fields")

        return self._write(rows, fmt, "Field Analytics")

    @staticmethod
    def _write(rows: List[Dict[str, Any]], fmt: str, sheet_name: str):
        if fmt == "csv":
            return export.to_csv(rows)
        if fmt == "xlsx":
            return export.to_xlsx(rows, sheet_name=sheet_name)
        return export.to_json(rows)
