# ==============================================
# FieldResolver
# ==============================================
#
# PURPOSE:
#   Find where a form field's answer lives inside a submission's
#   free-form data map.
#
# WHY THIS CLASS EXISTS:
#   Submission keys do not reliably match the current schema. A field
#   renamed last month still has old answers stored under its old
#   spelling. The resolver tries the ordered candidate keys from
#   normalization.key_variants and settles on the best one.
#
# CLASS: FieldResolver
# --------------------
#   Stateless. Never raises: no match is a normal outcome.
#
#   Methods:
#   --------
#   - resolve(field, record) -> Any | None
#       First present value among the candidate keys of ONE record.
#
#   - resolve_best_key(field, records) -> str | None
#       The single candidate key with the most present values across
#       the whole batch. Ties go to the earliest candidate. None if no
#       candidate matches any record.
#
#   - count_present(key, records) -> int
#       How many records hold a present value under `key`.
#
# ==============================================

import logging
from typing import Any, Iterable, List, Optional, Sequence

from form_analytics.normalization import (
    FieldDefinition,
    SubmissionRecord,
    candidate_keys,
    is_present,
)

logger = logging.getLogger(__name__)


class FieldResolver:
    """
    Resolves a field definition to a key of the submission data map.
    """

    def candidates(self, field: FieldDefinition) -> List[str]:
        """Ordered candidate keys for a field."""
        return candidate_keys(field.id, field.label)

    def resolve(self, field: FieldDefinition, record: SubmissionRecord) -> Optional[Any]:
        """
        Resolve a field's value in a single record.

        Args:
            field: The field to look up
            record: The submission to read from

        Returns:
            The first present value, or None if no candidate key has one
        """
        for key in self.candidates(field):
            value = record.get(key)
            if is_present(value):
                return value
        return None

    def resolve_best_key(
        self,
        field: FieldDefinition,
        records: Sequence[SubmissionRecord],
    ) -> Optional[str]:
        """
        Pick the one key to use for every record in the batch.

        Using a single key keeps the response count well-defined and
        prevents one record being read under two spellings.

        Args:
            field: The field to look up
            records: The full submission set

        Returns:
            The winning key, or None when nothing matches
        """
        best_key: Optional[str] = None
        best_count = 0

        for key in self.candidates(field):
            count = self.count_present(key, records)
            # Strictly greater: earlier candidates win ties
            if count > best_count:
                best_key = key
                best_count = count

        logger.debug(
            "Field %r (%s): %d responses using key %r",
            field.label, field.type.value, best_count, best_key,
        )
        return best_key

    @staticmethod
    def count_present(key: str, records: Iterable[SubmissionRecord]) -> int:
        return sum(1 for record in records if is_present(record.get(key)))
