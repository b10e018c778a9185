# ==============================================
# Tests for Response Export
# ==============================================

import io

import pytest
from bson import Decimal128, ObjectId
from openpyxl import load_workbook

from form_analytics import export
from form_analytics.analysis import DistributionEntry, FieldStats, FormStatistics
from form_analytics.errors import ExportError
from form_analytics.normalization import FieldType


@pytest.fixture
def submissions(make_submission):
    files = [{"name": "cv.pdf", "url": "https://cdn/cv.pdf", "size": 10, "type": "application/pdf"}]
    return [
        make_submission({"Full Name": "Ada, L.", "Resume": files}),
        make_submission({"Full Name": "Linus", "Skills": ["go", "rust"], "Notes": None}),
    ]


class TestSubmissionRows:

    def test_all_columns(self, submissions):
        rows = export.submission_rows(submissions)
        assert list(rows[0]) == ["Submission Timestamp", "Full Name", "Resume"]
        assert rows[0]["Resume"] == "cv.pdf"
        assert rows[1]["Skills"] == "go, rust"
        assert rows[1]["Notes"] == ""

    def test_selected_fields(self, submissions):
        rows = export.submission_rows(submissions, ["fullname"])
        assert rows == [{"Full Name": "Ada, L."}, {"Full Name": "Linus"}]

    def test_timestamp_selector(self, submissions):
        rows = export.submission_rows(submissions, ["timestamp"])
        assert list(rows[0]) == ["Submission Timestamp"]


class TestWriters:

    def test_csv_quotes_and_union_of_headers(self, submissions):
        text = export.to_csv(export.submission_rows(submissions, ["fullname", "skills"]))
        assert text.split("\n")[:3] == ["Full Name,Skills", '"Ada, L.",', 'Linus,"go, rust"']

    def test_xlsx(self, submissions):
        data = export.to_xlsx(export.submission_rows(submissions, ["fullname"]))
        ws = load_workbook(io.BytesIO(data)).active
        assert ws.title == "Form Responses"
        assert ws.cell(row=1, column=1).value == "Full Name"
        assert ws.cell(row=3, column=1).value == "Linus"

    def test_json(self, submissions):
        result = export.to_json(export.submission_rows(submissions))
        assert result["total"] == 2
        assert "exported_at" in result

    def test_driver_types_become_text(self, make_submission):
        oid = ObjectId("65f0c2a9e4b0a1b2c3d4e5f6")
        rows = export.submission_rows([
            make_submission({"Ref": oid, "Salary": Decimal128("1200.50"), "Age": 30, "Agreed": True}),
        ], ["ref", "salary", "age", "agreed"])

        assert rows[0] == {"Ref": str(oid), "Salary": "1200.50", "Age": 30, "Agreed": True}
        ws = load_workbook(io.BytesIO(export.to_xlsx(rows))).active
        assert ws.cell(row=2, column=1).value == str(oid)

    @pytest.mark.parametrize("writer", [export.to_csv, export.to_xlsx, export.to_json])
    def test_empty_rows_rejected(self, writer):
        with pytest.raises(ExportError):
            writer([])


class TestFieldStatsRows:

    def test_flattening(self):
        statistics = FormStatistics(field_stats=[
            FieldStats(
                label="Work Preference",
                field_type=FieldType.SELECT,
                responses=2,
                distribution=[DistributionEntry("Remote", 2, 100.0), DistributionEntry("Onsite", 0, 0.0)],
            ),
            FieldStats(label="Cover Letter", field_type=FieldType.TEXTAREA, responses=1, average_length=12),
            FieldStats(label="Email", field_type=FieldType.EMAIL, responses=2),
        ])

        rows = export.field_stats_rows(statistics)

        assert len(rows) == 4
        assert rows[0]["Option"] == "Remote" and rows[0]["Percentage"] == 100.0
        assert rows[2]["Average Length"] == 12
        assert rows[3] == {"Field": "Email", "Type": "email", "Responses": 2}
