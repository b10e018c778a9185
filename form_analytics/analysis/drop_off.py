# ==============================================
# DropOffEstimator
# ==============================================
#
# PURPOSE:
#   Estimate where respondents give up: for each required field, the
#   share of submissions that arrived without an answer to it.
#
# WHY PRESENCE IS CHECKED PER KEY HERE:
#   Unlike FieldAnalyticsCalculator, this is a yes/no check per record.
#   A value under EITHER field.id or field.label counts as answered; no
#   batch-wide key is chosen.
#
# CLASS: DropOffEstimator
# -----------------------
#   Constructor:
#   ------------
#   - __init__(max_points: int = 5)
#
#   Methods:
#   --------
#   - estimate(schema, records) -> list[DropOffPoint]
#       Required fields missed at least once; highest rate first;
#       at most `max_points` entries.
#
#   - is_missing(field, record) -> bool
#
# ==============================================

from typing import List, Sequence

from form_analytics.normalization import (
    FieldDefinition,
    FormSchema,
    SubmissionRecord,
    is_present,
)
from .rounding import percentage, round_one_decimal
from .statistics import DropOffPoint

DEFAULT_MAX_POINTS = 5


class DropOffEstimator:
    """Ranks required fields by how often they are left empty."""

    def __init__(self, max_points: int = DEFAULT_MAX_POINTS):
        self.max_points = max_points

    def estimate(
        self,
        schema: FormSchema,
        records: Sequence[SubmissionRecord],
    ) -> List[DropOffPoint]:
        """
        Compute drop-off points for a form.

        Args:
            schema: The form's current schema
            records: Every submission of the form

        Returns:
            Drop-off points sorted by rate, highest first
        """
        total = len(records)
        points: List[DropOffPoint] = []

        for field in schema.required_fields:
            missing = sum(1 for record in records if self.is_missing(field, record))
            # Filter on the raw count: a tiny rate may round to 0.0
            if missing > 0:
                rate = round_one_decimal(percentage(missing, total))
                points.append(DropOffPoint(field_label=field.label, drop_off_rate=rate))

        # sorted() is stable: equal rates keep schema order
        points = sorted(points, key=lambda point: point.drop_off_rate, reverse=True)
        return points[: self.max_points]

    @staticmethod
    def is_missing(field: FieldDefinition, record: SubmissionRecord) -> bool:
        return not is_present(record.get(field.id)) and not is_present(record.get(field.label))
