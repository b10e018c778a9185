# ==============================================
# FieldAnalyticsCalculator
# ==============================================
#
# PURPOSE:
#   Compute per-field response analytics over a whole submission set:
#   a response count for every field, an option distribution for
#   select fields and an average answer length for textarea fields.
#
# CLASS: FieldAnalyticsCalculator
# -------------------------------
#   Stateless apart from its FieldResolver.
#
#   Constructor:
#   ------------
#   - __init__(resolver: FieldResolver = None)
#
#   Methods:
#   --------
#   - analyze(field, records) -> FieldStats
#       1. Pick the batch-wide key (FieldResolver.resolve_best_key)
#       2. No key → FieldStats with responses = 0
#       3. SELECT   → distribution in declared option order
#       4. TEXTAREA → rounded average length of string answers
#       5. Others   → responses only
#
#   - analyze_all(schema, records) -> list[FieldStats]
#       One entry per schema field, in schema order.
#
# ==============================================

from typing import List, Optional, Sequence

from form_analytics.normalization import (
    FieldDefinition,
    FieldType,
    FormSchema,
    SubmissionRecord,
    ValueKind,
    classify_value,
)
from .field_resolver import FieldResolver
from .field_stats import DistributionEntry, FieldStats
from .rounding import percentage, round_half_up, round_one_decimal


class FieldAnalyticsCalculator:
    """
    Builds FieldStats for form fields from raw submission records.
    """

    def __init__(self, resolver: Optional[FieldResolver] = None):
        """
        Args:
            resolver: Optional FieldResolver. A new one is created if omitted.
        """
        self.resolver = resolver or FieldResolver()

    def analyze(
        self,
        field: FieldDefinition,
        records: Sequence[SubmissionRecord],
    ) -> FieldStats:
        """
        Analyze one field across all submissions.

        Args:
            field: The field definition from the current schema
            records: Every submission of the form

        Returns:
            FieldStats for the field
        """
        stats = FieldStats(
            label=field.label,
            field_type=field.type,
            field_id=field.id,
        )

        key = self.resolver.resolve_best_key(field, records)
        if key is None:
            return stats

        stats.resolved_key = key
        stats.responses = self.resolver.count_present(key, records)

        if field.type is FieldType.SELECT:
            stats.distribution = self._distribution(field, key, records, stats.responses)
        elif field.type is FieldType.TEXTAREA:
            stats.average_length = self._average_length(key, records)

        return stats

    def analyze_all(
        self,
        schema: FormSchema,
        records: Sequence[SubmissionRecord],
    ) -> List[FieldStats]:
        return [self.analyze(field, records) for field in schema.fields]

    def _distribution(
        self,
        field: FieldDefinition,
        key: str,
        records: Sequence[SubmissionRecord],
        responses: int,
    ) -> List[DistributionEntry]:
        # Seed every declared option so unused ones still show up
        counts = {option: 0 for option in field.options}

        for record in records:
            value = record.get(key)
            if classify_value(value) is not ValueKind.STRING:
                continue
            # Stale values from an older option list are ignored
            if value in counts:
                counts[value] += 1

        return [
            DistributionEntry(
                option=option,
                count=counts[option],
                percentage=round_one_decimal(percentage(counts[option], responses)),
            )
            for option in field.options
        ]

    def _average_length(self, key: str, records: Sequence[SubmissionRecord]) -> int:
        total_length = 0
        count = 0

        for record in records:
            value = record.get(key)
            if classify_value(value) is ValueKind.STRING:
                total_length += len(value)
                count += 1

        if count == 0:
            return 0
        return int(round_half_up(total_length / count))
