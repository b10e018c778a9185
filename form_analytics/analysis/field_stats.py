# ==============================================
# FieldStats
# ==============================================
#
# PURPOSE:
#   Data classes holding the computed analytics for a single form
#   field: how many submissions answered it, plus a type-specific
#   breakdown.
#
# CLASS: DistributionEntry (dataclass)
# ------------------------------------
#   - option: str
#   - count: int
#   - percentage: float          → count / responses * 100, one decimal
#
# CLASS: FieldStats (dataclass)
# -----------------------------
#   - field_id: str | None
#   - label: str
#   - field_type: FieldType
#   - responses: int             → Records with a value under the resolved key
#   - resolved_key: str | None   → The key the value was read from
#   - distribution: list[DistributionEntry] | None   (select fields)
#   - average_length: int | None                     (textarea fields)
#
#   Methods:
#   --------
#   - to_dict() -> dict          → camelCase shape consumed by dashboards
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from form_analytics.normalization import FieldType


@dataclass
class DistributionEntry:
    """One option's share of a select field's responses."""
    option: str
    count: int = 0
    percentage: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "option": self.option,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass
class FieldStats:
    """
    Analytics for one form field.

    Only one of `distribution` / `average_length` is ever set, depending
    on the field type. Plain text, email, phone and file fields report
    `responses` alone.
    """

    # --- Identity ---
    label: str
    field_type: FieldType
    field_id: Optional[str] = None

    # --- Counters ---
    responses: int = 0
    resolved_key: Optional[str] = None

    # --- Type-specific breakdown ---
    distribution: Optional[List[DistributionEntry]] = None
    average_length: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the dictionary shape used by dashboards and exports.

        Returns:
            A JSON-serializable dictionary
        """
        result: Dict[str, Any] = {
            "fieldId": self.field_id,
            "label": self.label,
            "type": self.field_type.value,
            "responses": self.responses,
        }
        if self.distribution is not None:
            result["distribution"] = [entry.to_dict() for entry in self.distribution]
        if self.average_length is not None:
            result["averageLength"] = self.average_length
        return result
