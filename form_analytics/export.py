"""Response export: submissions and field analytics as tables.

Rows are plain dicts keyed by column header, so the same rows feed the
CSV, XLSX and JSON writers. Column order follows first appearance across
all rows.
"""

import csv
import io
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from openpyxl import Workbook

from form_analytics.analysis import FormStatistics
from form_analytics.errors import ExportError
from form_analytics.normalization import (
    SubmissionRecord,
    ValueClassifier,
    ValueKind,
    compact_key,
)

TIMESTAMP_COLUMN = "Submission Timestamp"
TIMESTAMP_SELECTOR = "timestamp"


def _cell_value(value: Any) -> Any:
    """Flatten an answer into something a spreadsheet cell can hold."""
    kind = ValueClassifier.classify(value)
    if kind is ValueKind.ABSENT:
        return ""
    if kind is ValueKind.FILES:
        return ", ".join(ValueClassifier.file_names(value))
    if kind is ValueKind.OBJECT:
        if isinstance(value, list):
            return ", ".join(str(item) for item in value)
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (str, bool, int, float)):
        return value
    # ObjectId, Decimal128 and other driver types
    return str(value)


def submission_rows(
    submissions: Iterable[SubmissionRecord],
    selected_fields: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """One row per submission: timestamp column first, then every answer.

    `selected_fields` holds compacted keys ("fullname" for "Full Name");
    "timestamp" selects the timestamp column. None selects everything.
    """
    selected = set(selected_fields) if selected_fields is not None else None
    rows = []
    for submission in submissions:
        row: Dict[str, Any] = {}
        if selected is None or TIMESTAMP_SELECTOR in selected:
            row[TIMESTAMP_COLUMN] = submission.submitted_at.isoformat()
        for key, value in submission.data.items():
            if selected is None or compact_key(key) in selected:
                row[key] = _cell_value(value)
        rows.append(row)
    return rows


def field_stats_rows(statistics: FormStatistics) -> List[Dict[str, Any]]:
    """Flatten per-field analytics: one row per select option, else one per field."""
    rows = []
    for stats in statistics.field_stats:
        base = {
            "Field": stats.label,
            "Type": stats.field_type.value,
            "Responses": stats.responses,
        }
        if stats.distribution:
            for entry in stats.distribution:
                rows.append({
                    **base,
                    "Option": entry.option,
                    "Count": entry.count,
                    "Percentage": entry.percentage,
                })
        elif stats.average_length is not None:
            rows.append({**base, "Average Length": stats.average_length})
        else:
            rows.append(base)
    return rows


def _headers(rows: Sequence[Dict[str, Any]]) -> List[str]:
    headers: List[str] = []
    seen = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                headers.append(key)
    return headers


def _require_rows(rows: Sequence[Dict[str, Any]]) -> None:
    if not rows:
        raise ExportError("No rows to export")


def to_csv(rows: Sequence[Dict[str, Any]]) -> str:
    _require_rows(rows)
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_headers(rows), restval="", lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buf.getvalue()


def to_xlsx(rows: Sequence[Dict[str, Any]], sheet_name: str = "Form Responses") -> bytes:
    """Generate workbook bytes with a single sheet of rows."""
    _require_rows(rows)
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    headers = _headers(rows)
    for col, h in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=h)

    for row_idx, row in enumerate(rows, 2):
        for col, h in enumerate(headers, 1):
            ws.cell(row=row_idx, column=col, value=row.get(h, ""))

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def to_json(rows: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    _require_rows(rows)
    return {
        "data": list(rows),
        "total": len(rows),
        "exported_at": datetime.now(timezone.utc).isoformat(),
    }
