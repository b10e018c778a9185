# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests. Nothing here needs a database:
# records are built in memory and the store is faked where needed.
#
# ==============================================

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from form_analytics.aggregation_engine import AggregationEngine
from form_analytics.config import AnalyticsConfig
from form_analytics.errors import FormNotFoundError
from form_analytics.normalization import (
    FieldDefinition,
    FieldType,
    FormSchema,
    FormSummary,
    SubmissionRecord,
    ViewEvent,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for growth windows."""
    return NOW


@pytest.fixture
def make_submission():
    """Factory for SubmissionRecords; `days_ago` is relative to NOW."""
    ids = count(1)

    def _make(data=None, days_ago=0.0, completion=None, form_id="form-1", submitted_at=None):
        return SubmissionRecord(
            id=f"sub-{next(ids)}",
            submitted_at=submitted_at or NOW - timedelta(days=days_ago),
            data=data or {},
            completion_time_seconds=completion,
            form_id=form_id,
        )

    return _make


@pytest.fixture
def make_view():
    def _make(days_ago=0.0, form_id="form-1"):
        return ViewEvent(form_id=form_id, timestamp=NOW - timedelta(days=days_ago))

    return _make


@pytest.fixture
def select_field() -> FieldDefinition:
    return FieldDefinition(
        id="field_pref",
        label="Work Preference",
        type=FieldType.SELECT,
        required=True,
        options=["Remote", "Hybrid", "Onsite"],
    )


@pytest.fixture
def textarea_field() -> FieldDefinition:
    return FieldDefinition(
        id="field_letter",
        label="Cover Letter",
        type=FieldType.TEXTAREA,
        required=False,
    )


@pytest.fixture
def schema(select_field, textarea_field) -> FormSchema:
    return FormSchema(
        id="form-1",
        title="Backend Engineer",
        fields=[
            FieldDefinition(id="field_name", label="Full Name", type=FieldType.TEXT, required=True),
            FieldDefinition(id="field_email", label="Email", type=FieldType.EMAIL, required=True),
            select_field,
            textarea_field,
            FieldDefinition(id="field_resume", label="Resume", type=FieldType.FILE, required=True),
        ],
    )


@pytest.fixture
def analytics_config() -> AnalyticsConfig:
    return AnalyticsConfig()


@pytest.fixture
def engine(analytics_config) -> AggregationEngine:
    return AggregationEngine(analytics_config)


# ==============================================
# In-memory store
# ==============================================

class FakeStore:
    """Keeps forms, submissions and views in lists."""

    def __init__(self, schemas=None, summaries=None, submissions=None, views=None, fail_with=None):
        self.schemas = {schema.id: schema for schema in schemas or []}
        self.summaries = summaries or []
        self.submissions = submissions or []
        self.views = views or []
        self.fail_with = fail_with

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def get_form(self, form_id):
        self._check()
        if form_id not in self.schemas:
            raise FormNotFoundError(form_id)
        return self.schemas[form_id]

    def get_user_forms(self, user_id):
        self._check()
        return list(self.summaries)

    def get_submissions(self, form_ids):
        self._check()
        return [s for s in self.submissions if s.form_id in form_ids]

    def get_views(self, form_ids):
        self._check()
        return [v for v in self.views if v.form_id in form_ids]

    def count_views(self, form_ids):
        self._check()
        counts = {}
        for view in self.get_views(form_ids):
            counts[view.form_id] = counts.get(view.form_id, 0) + 1
        return counts


@pytest.fixture
def store(schema, make_submission, make_view, now):
    return FakeStore(
        schemas=[schema],
        summaries=[FormSummary(id="form-1", created_at=now - timedelta(days=3))],
        submissions=[
            make_submission({"Full Name": "Ada", "Work Preference": "Remote"}, days_ago=1),
            make_submission({"Full Name": "Linus"}, days_ago=2),
        ],
        views=[make_view(days_ago=d) for d in (1, 2, 3, 4)],
    )

