"""
Test suite for CSV export of applications.

System role: Verification of export serialization
"""

import uuid
from datetime import date, datetime, timezone

import pytest

from jobtracker.boundary.db.models.application_model import ApplicationStatus
from jobtracker.core.csv_export import (
    CSV_HEADERS,
    applications_to_csv,
    escape_csv_value,
    export_filename,
    parse_csv_line,
)


@pytest.fixture
def sample_application() -> dict:
    """Application dict as produced by ApplicationService."""
    return {
        "id": uuid.UUID("11111111-2222-3333-4444-555555555555"),
        "company": "Acme, Inc.",
        "position": 'Engineer "II"',
        "status": ApplicationStatus.INTERVIEW,
        "applied_date": date(2024, 1, 15),
        "next_date": datetime(2024, 1, 25, 14, 30, tzinfo=timezone.utc),
        "next_event": "Technical Interview",
        "cv_version": None,
        "notes": "ignored in export",
        "job_url": "https://acme.example/jobs/1",
        "created_at": datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 16, 9, 0, tzinfo=timezone.utc),
    }


class TestEscapeCsvValue:
    """Test suite for escape_csv_value()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("plain", "plain"),
            ("a,b", '"a,b"'),
            ('say "hi"', '"say ""hi"""'),
            ("line\nbreak", '"line\nbreak"'),
            ("carriage\rreturn", '"carriage\rreturn"'),
            ("crlf\r\nend", '"crlf\r\nend"'),
            (None, ""),
            (42, "42"),
        ],
    )
    def test_escape_should_quote_only_when_needed(self, value, expected: str) -> None:
        assert escape_csv_value(value) == expected

    def test_parse_should_reverse_escape_for_simple_values(self) -> None:
        values = ["TechCorp", "a,b", 'He said "go"', "", "x"]

        line = ",".join(escape_csv_value(v) for v in values)

        assert parse_csv_line(line) == values

    def test_parse_should_keep_line_breaks_inside_quoted_values(self) -> None:
        values = ["Acme", "Round 1\nRound 2", "x"]

        line = ",".join(escape_csv_value(v) for v in values)

        assert parse_csv_line(line) == values


class TestApplicationsToCsv:
    """Test suite for applications_to_csv()."""

    def test_csv_should_start_with_header(self) -> None:
        csv_text = applications_to_csv([])

        assert csv_text.splitlines() == [",".join(CSV_HEADERS)]

    def test_csv_should_format_dates_and_quote_fields(self, sample_application: dict) -> None:
        lines = applications_to_csv([sample_application]).splitlines()

        row = parse_csv_line(lines[1])
        assert row[0] == "11111111-2222-3333-4444-555555555555"
        assert row[1] == "Acme, Inc."
        assert row[2] == 'Engineer "II"'
        assert row[3] == "interview"
        assert row[4] == "2024-01-15"
        assert row[5] == "2024-01-25"
        assert row[7] == ""
        assert row[9] == "2024-01-15T09:00:00+00:00"

    def test_export_filename_should_use_iso_date(self) -> None:
        assert export_filename(date(2024, 3, 9)) == "applications-2024-03-09.csv"
