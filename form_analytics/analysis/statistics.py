# ==============================================
# Statistics (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of the aggregation engine:
#   trend points, drop-off points and the two top-level statistics
#   objects consumed by dashboards and exports.
#
# CLASSES:
# --------
# - TrendPoint (dataclass)            → One calendar day's submission count
# - DropOffPoint (dataclass)          → Share of submissions missing a required field
# - FormStatistics (dataclass)        → Everything shown on one form's analytics page
# - DashboardStatistics (dataclass)   → Totals across all of a user's forms
#
#   Methods:
#   --------
#   - to_dict() -> dict          → camelCase keys, JSON-serializable
#   - empty() (classmethod)      → All-zero default, used when inputs could
#                                  not be fetched
#
# ==============================================

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List

from .field_stats import FieldStats

NOT_AVAILABLE = "N/A"


@dataclass
class TrendPoint:
    """Number of submissions received on one calendar day."""
    date: date
    count: int = 0

    @property
    def label(self) -> str:
        """Short chart label, e.g. "Jan 31"."""
        return f"{self.date.strftime('%b')} {self.date.day}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "label": self.label,
            "count": self.count,
        }


@dataclass
class DropOffPoint:
    """Percentage of submissions that left a required field empty."""
    field_label: str
    drop_off_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fieldLabel": self.field_label,
            "dropOffRate": self.drop_off_rate,
        }


@dataclass
class FormStatistics:
    """
    Analytics for a single form.

    Rates are percentages rounded to one decimal. Growth values are
    signed; everything else is non-negative.
    """

    # --- Totals ---
    total_submissions: int = 0
    total_views: int = 0

    # --- Rates ---
    conversion_rate: float = 0.0
    completion_rate: float = 0.0
    average_completion_time: str = NOT_AVAILABLE

    # --- Period-over-period growth ---
    submissions_growth: float = 0.0
    views_growth: float = 0.0
    conversion_growth: float = 0.0
    completion_time_growth: float = 0.0

    # --- Breakdowns ---
    trend: List[TrendPoint] = field(default_factory=list)
    field_stats: List[FieldStats] = field(default_factory=list)
    drop_off_points: List[DropOffPoint] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "FormStatistics":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalSubmissions": self.total_submissions,
            "totalViews": self.total_views,
            "conversionRate": self.conversion_rate,
            "completionRate": self.completion_rate,
            "averageCompletionTime": self.average_completion_time,
            "submissionsGrowth": self.submissions_growth,
            "viewsGrowth": self.views_growth,
            "conversionGrowth": self.conversion_growth,
            "completionTimeGrowth": self.completion_time_growth,
            "trend": [point.to_dict() for point in self.trend],
            "fieldStats": [stats.to_dict() for stats in self.field_stats],
            "dropOffPoints": [point.to_dict() for point in self.drop_off_points],
        }


@dataclass
class DashboardStatistics:
    """Totals across every form a user owns."""

    total_forms: int = 0
    total_submissions: int = 0
    total_views: int = 0
    conversion_rate: float = 0.0
    forms_growth: float = 0.0
    submissions_growth: float = 0.0
    views_growth: float = 0.0
    conversion_growth: float = 0.0

    @classmethod
    def empty(cls) -> "DashboardStatistics":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalForms": self.total_forms,
            "totalSubmissions": self.total_submissions,
            "totalViews": self.total_views,
            "conversionRate": self.conversion_rate,
            "formsGrowth": self.forms_growth,
            "submissionsGrowth": self.submissions_growth,
            "viewsGrowth": self.views_growth,
            "conversionGrowth": self.conversion_growth,
        }
