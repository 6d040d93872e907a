"""
CSV export of job applications.

Minimal quoting: a value is wrapped in double quotes only when it contains
a comma, a double quote or a line break, with embedded quotes doubled.

Dependencies: csv (stdlib)
System role: Serialization for the applications export endpoint
"""

import csv
import io
from datetime import date, datetime
from typing import Any, Iterable, Mapping

# On Python 3.11 QUOTE_MINIMAL only quotes line-break characters found in the terminator
RECORD_TERMINATOR = "\r\n"

CSV_HEADERS = [
    "ID",
    "Company",
    "Position",
    "Status",
    "Applied Date",
    "Next Date",
    "Next Event",
    "CV Version",
    "Job URL",
    "Created At",
    "Updated At",
]


def escape_csv_value(value: Any) -> str:
    """
    Render a single CSV field.

    Args:
        value: Field value (None renders as empty)

    Returns:
        str: Field text, quoted when needed
    """
    text = "" if value is None else str(value)
    if text == "":
        return ""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator=RECORD_TERMINATOR).writerow([text])
    return buffer.getvalue().removesuffix(RECORD_TERMINATOR)


def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV record back into field values.

    Args:
        line: A record produced by escape_csv_value joined with commas

    Returns:
        list[str]: Unescaped field values
    """
    return next(csv.reader(io.StringIO(line)), [])


def _format_date(value: date | datetime | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _format_timestamp(value: datetime | None) -> str:
    return value.isoformat() if value is not None else ""


def _status_value(status: Any) -> str:
    return getattr(status, "value", status) or ""


def application_to_row(application: Mapping[str, Any]) -> list[str]:
    """
    Convert an application dict into CSV field values.

    Args:
        application: Application dict as returned by ApplicationService

    Returns:
        list[str]: Field values in CSV_HEADERS order
    """
    return [
        str(application["id"]),
        application.get("company") or "",
        application.get("position") or "",
        _status_value(application.get("status")),
        _format_date(application.get("applied_date")),
        _format_date(application.get("next_date")),
        application.get("next_event") or "",
        application.get("cv_version") or "",
        application.get("job_url") or "",
        _format_timestamp(application.get("created_at")),
        _format_timestamp(application.get("updated_at")),
    ]


def applications_to_csv(applications: Iterable[Mapping[str, Any]]) -> str:
    """
    Serialize applications to a CSV document with a header row.

    Args:
        applications: Application dicts

    Returns:
        str: CSV text, one record per line
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=RECORD_TERMINATOR)
    writer.writerow(CSV_HEADERS)
    for application in applications:
        writer.writerow(application_to_row(application))
    return buffer.getvalue()


def export_filename(today: date, extension: str = "csv") -> str:
    """Attachment filename for an export produced on the given day."""
    return f"applications-{today.isoformat()}.{extension}"
