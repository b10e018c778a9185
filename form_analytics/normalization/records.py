# ==============================================
# Records (Data Classes)
# ==============================================
#
# PURPOSE:
#   Typed shapes for everything the analytics engine reads: the form
#   schema, form summaries, submission records and view events.
#
# WHY THIS FILE EXISTS:
#   The store hands back loosely-typed documents. Converting them once,
#   at the boundary, means the analysis code never has to guess whether
#   a timestamp is a string or a datetime, or whether "required" is set.
#
# ENUMS:
# ------
# - FieldType(Enum): TEXT, EMAIL, PHONE, TEXTAREA, SELECT, FILE
#
# CLASSES:
# --------
# - FieldDefinition   → One question on a form
# - FormSchema        → A form and its ordered fields
# - FormSummary       → Form id + creation time (+ optional view counter)
# - SubmissionRecord  → One completed response (immutable)
# - ViewEvent         → One page view of a published form
#
#   Each class offers from_dict(data) to build itself from a store
#   document (snake_case or camelCase keys are both accepted).
#
# ==============================================

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .value_classifier import ValueClassifier


class FieldType(Enum):
    """
    The kinds of question a form can ask.

    Unknown type strings read from the store fall back to TEXT, which
    only ever reports a response count.
    """
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    TEXTAREA = "textarea"
    SELECT = "select"
    FILE = "file"

    @classmethod
    def parse(cls, value: Any) -> "FieldType":
        if isinstance(value, FieldType):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.TEXT


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in a document, trying each spelling."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _require_timestamp(data: Mapping[str, Any], *keys: str) -> datetime:
    raw = _pick(data, *keys)
    parsed = ValueClassifier.parse_timestamp(raw)
    if parsed is None:
        raise ValueError(f"Invalid or missing timestamp {keys[0]!r}: {raw!r}")
    return parsed


@dataclass
class FieldDefinition:
    """A single question on a form."""

    label: str
    type: FieldType = FieldType.TEXT
    id: Optional[str] = None  # Absent on some legacy forms
    required: bool = False
    options: List[str] = field(default_factory=list)  # Only meaningful for SELECT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDefinition":
        raw_id = data.get("id")
        raw_options = data.get("options") or []
        return cls(
            label=str(data.get("label") or ""),
            type=FieldType.parse(data.get("type", "text")),
            id=str(raw_id) if raw_id not in (None, "") else None,
            required=bool(data.get("required", False)),
            options=[str(option) for option in raw_options],
        )


@dataclass
class FormSchema:
    """A form and its ordered field definitions."""

    id: str
    title: str = ""
    fields: List[FieldDefinition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormSchema":
        raw_fields = data.get("fields")
        if not isinstance(raw_fields, list):
            raw_fields = []
        return cls(
            id=str(_pick(data, "id", "_id", default="")),
            title=str(data.get("title") or ""),
            fields=[
                FieldDefinition.from_dict(item)
                for item in raw_fields
                if isinstance(item, dict)
            ],
        )

    @property
    def required_fields(self) -> List[FieldDefinition]:
        return [f for f in self.fields if f.required]


@dataclass
class FormSummary:
    """Just enough about a form for dashboard totals."""

    id: str
    created_at: datetime
    view_count: Optional[int] = None  # Pre-aggregated counter, when the store keeps one

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormSummary":
        view_count = _pick(data, "view_count", "total_views", "views", "viewCount")
        return cls(
            id=str(_pick(data, "id", "_id", default="")),
            created_at=_require_timestamp(data, "created_at", "createdAt"),
            view_count=int(view_count) if view_count is not None else None,
        )


@dataclass(frozen=True)
class SubmissionRecord:
    """One respondent's answers. Never modified after creation."""

    id: str
    submitted_at: datetime
    data: Mapping[str, Any] = field(default_factory=dict)
    completion_time_seconds: Optional[float] = None
    form_id: Optional[str] = None

    def __post_init__(self):
        # Read-only view so analysis code cannot mutate the payload
        object.__setattr__(self, "data", MappingProxyType(dict(self.data or {})))

    def get(self, key: Optional[str]) -> Any:
        if not key:
            return None
        return self.data.get(key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubmissionRecord":
        payload = data.get("data")
        completion = _pick(data, "completion_time_seconds", "completionTimeSeconds")
        form_id = _pick(data, "form_id", "formId")
        return cls(
            id=str(_pick(data, "id", "_id", default="")),
            submitted_at=_require_timestamp(data, "submitted_at", "submittedAt"),
            data=payload if isinstance(payload, dict) else {},
            completion_time_seconds=float(completion) if isinstance(completion, (int, float)) and not isinstance(completion, bool) else None,
            form_id=str(form_id) if form_id is not None else None,
        )


@dataclass(frozen=True)
class ViewEvent:
    """One page view of a published form."""

    form_id: str
    timestamp: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewEvent":
        return cls(
            form_id=str(_pick(data, "form_id", "formId", default="")),
            timestamp=ValueClassifier.parse_timestamp(
                _pick(data, "timestamp", "viewed_at", "created_at")
            ),
        )
