# ==============================================
# TOPIC 2: ANALYSIS
# ==============================================
#
# This package computes response analytics from a form schema and
# its already-fetched submission records.
#
# Modules:
# --------
# - field_resolver.py  → Find the data key holding a field's answer
# - field_analyzer.py  → Per-field responses, distributions, text lengths
# - field_stats.py     → FieldStats / DistributionEntry data classes
# - drop_off.py        → Required fields ranked by how often they are empty
# - trend.py           → Daily submission time series
# - growth.py          → Period-over-period growth percentages
# - statistics.py      → TrendPoint, DropOffPoint, FormStatistics, DashboardStatistics
# - rounding.py        → Half-up rounding and zero-safe percentages
#
# ==============================================

from .field_resolver import FieldResolver
from .field_stats import DistributionEntry, FieldStats
from .field_analyzer import FieldAnalyticsCalculator
from .statistics import (
    DashboardStatistics,
    DropOffPoint,
    FormStatistics,
    TrendPoint,
)
from .drop_off import DropOffEstimator
from .trend import TrendBucketizer
from .growth import GrowthCalculator, growth

__all__ = [
    "FieldResolver",
    "DistributionEntry",
    "FieldStats",
    "FieldAnalyticsCalculator",
    "DashboardStatistics",
    "DropOffPoint",
    "FormStatistics",
    "TrendPoint",
    "DropOffEstimator",
    "TrendBucketizer",
    "GrowthCalculator",
    "growth",
]
