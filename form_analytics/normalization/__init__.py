# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package turns raw store documents into typed records and
# classifies the loosely-typed answer values found inside them,
# BEFORE anything enters the analysis step.
#
# Modules:
# --------
# - value_classifier.py → Tag answer values (absent, string, files, object, other)
# - key_variants.py     → Ordered candidate keys for a field's answer
# - records.py          → FormSchema, FieldDefinition, SubmissionRecord, ViewEvent
#
# ==============================================

from .value_classifier import ValueClassifier, ValueKind, classify_value, is_present
from .key_variants import candidate_keys, compact_key
from .records import (
    FieldDefinition,
    FieldType,
    FormSchema,
    FormSummary,
    SubmissionRecord,
    ViewEvent,
)

__all__ = [
    "ValueClassifier",
    "ValueKind",
    "classify_value",
    "is_present",
    "candidate_keys",
    "compact_key",
    "FieldDefinition",
    "FieldType",
    "FormSchema",
    "FormSummary",
    "SubmissionRecord",
    "ViewEvent",
]
