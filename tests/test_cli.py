# ==============================================
# Tests for CLI
# ==============================================

import json

import pytest

from form_analytics import cli
from form_analytics.errors import StoreError


@pytest.fixture
def patched_store(monkeypatch, store):
    """Replace the MongoDB store with the in-memory one."""

    class _Store:
        @classmethod
        def from_config(cls, mongo, collections=None):
            return cls()

        def __enter__(self):
            return store

        def __exit__(self, exc_type, exc_val, exc_tb):
            return False

    monkeypatch.setattr(cli, "MongoFormStore", _Store)
    return store


class TestCli:

    def test_form_command(self, patched_store, capsys):
        assert cli.main(["form", "form-1"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["totalSubmissions"] == 2
        assert data["totalViews"] == 4

    def test_dashboard_command(self, patched_store, capsys):
        assert cli.main(["--view-counter", "dashboard", "user-1"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["totalForms"] == 1
        assert data["totalViews"] == 4

    def test_export_to_file(self, patched_store, tmp_path):
        output = tmp_path / "responses.csv"
        assert cli.main(["export", "form-1", "--format", "csv", "--output", str(output)]) == 0
        assert output.read_text().startswith("Submission Timestamp,Full Name")

    def test_export_error(self, patched_store, capsys):
        patched_store.fail_with = StoreError("down")
        assert cli.main(["export", "form-1"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_export_field_stats(self, patched_store, capsys):
        assert cli.main(["export", "form-1", "--field-stats", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["total"] == 7
        assert data["data"][0] == {"Field": "Full Name", "Type": "text", "Responses": 2}
