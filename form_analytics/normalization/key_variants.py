# ==============================================
# Key Variants
# ==============================================
#
# PURPOSE:
#   Produce the ordered list of submission-data keys under which a
#   form field's answer may have been stored.
#
# WHY THIS MODULE EXISTS:
#   Forms are edited over time. A field's label can be retyped, its id
#   regenerated, and older submissions keep whatever key was current
#   when they were saved:
#     - "Work Preference", "field_17", "work preference",
#       "Work_Preference", "Work-Preference"
#   Each variant is a small pure transform so the lookup order stays
#   explicit and testable.
#
# ORDER (first match wins ties):
# ------------------------------
#   1. label             (as entered)
#   2. id
#   3. label lower-cased
#   4. label, whitespace runs -> "_"
#   5. label, whitespace runs -> "-"
#
# FUNCTIONS:
# ----------
#   - candidate_keys(field_id, label) -> list[str]
#       Apply every transform in order, dropping empty results.
#
# ==============================================

import re
from typing import Callable, List, Optional, Tuple

_WHITESPACE = re.compile(r"\s+")

KeyTransform = Callable[[Optional[str], Optional[str]], Optional[str]]


def _label(field_id: Optional[str], label: Optional[str]) -> Optional[str]:
    return label


def _field_id(field_id: Optional[str], label: Optional[str]) -> Optional[str]:
    return field_id


def _lower_label(field_id: Optional[str], label: Optional[str]) -> Optional[str]:
    return label.lower() if label else None


def _underscored_label(field_id: Optional[str], label: Optional[str]) -> Optional[str]:
    return _WHITESPACE.sub("_", label) if label else None


def _hyphenated_label(field_id: Optional[str], label: Optional[str]) -> Optional[str]:
    return _WHITESPACE.sub("-", label) if label else None


KEY_TRANSFORMS: List[Tuple[str, KeyTransform]] = [
    ("label", _label),
    ("id", _field_id),
    ("lower_label", _lower_label),
    ("underscored_label", _underscored_label),
    ("hyphenated_label", _hyphenated_label),
]


def candidate_keys(field_id: Optional[str], label: Optional[str]) -> List[str]:
    """
    Build the ordered candidate keys for a field.

    Duplicates are kept: they cannot change which key wins because a later
    duplicate never matches more records than its first occurrence.

    Args:
        field_id: The field's id (may be None on legacy forms)
        label: The field's label

    Returns:
        Non-empty candidate keys in priority order
    """
    keys = []
    for _, transform in KEY_TRANSFORMS:
        key = transform(field_id, label)
        if key:
            keys.append(key)
    return keys


def compact_key(key: str) -> str:
    """Lower-case a key and strip all whitespace ("Full Name" -> "fullname")."""
    return _WHITESPACE.sub("", key.lower())
