# =============================================================================
# core/services/export_service.py - Booking CSV Export
# =============================================================================
# Builds the admin "Export CSV" download.
#
# Every field is quoted and embedded quotes are doubled. Line breaks inside
# free text are flattened to spaces so each booking stays on one line.
# =============================================================================

import csv
import io
import logging
from datetime import date

import pandas as pd

from app.exceptions import NoBookingsToExportError
from core.models.booking import BookingRecord
from lib.utils import flatten_whitespace

logger = logging.getLogger(__name__)

# Header label -> BookingRecord attribute
CSV_COLUMNS: dict[str, str] = {
    "Name": "full_name",
    "Gender": "gender",
    "Phone": "phone",
    "Date of Birth": "date_of_birth",
    "Time of Birth": "time_of_birth",
    "Place of Birth": "place_of_birth",
    "Question/Concern": "question_concern",
    "Plan": "preferred_plan",
    "Status": "status",
    "Payment Screenshot": "payment_screenshot_url",
    "Created At": "created_at",
}

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def export_filename(today: date | None = None) -> str:
    """cosmoracle-bookings-<YYYY-MM-DD>.csv"""
    today = today or date.today()
    return f"cosmoracle-bookings-{today.isoformat()}.csv"


def bookings_to_dataframe(bookings: list[BookingRecord]) -> pd.DataFrame:
    """One row per booking, columns named by the CSV header labels."""
    records = [booking.model_dump() for booking in bookings]
    df = pd.DataFrame(records, columns=list(CSV_COLUMNS.values()))

    created = pd.to_datetime(df["created_at"], errors="coerce", utc=True)
    df["created_at"] = created.dt.strftime(CREATED_AT_FORMAT)

    df = df.astype(object).where(df.notnull(), "")
    df = df.map(lambda value: flatten_whitespace(str(value)))

    return df.rename(columns={attr: label for label, attr in CSV_COLUMNS.items()})


def export_bookings_csv(bookings: list[BookingRecord]) -> str:
    """
    Render bookings as CSV text.

    Args:
        bookings: Records in the order they should appear

    Returns:
        CSV content: header line plus one line per booking

    Raises:
        NoBookingsToExportError: If there is nothing to export
    """
    if not bookings:
        raise NoBookingsToExportError()

    df = bookings_to_dataframe(bookings)

    buffer = io.StringIO()
    buffer.write(",".join(CSV_COLUMNS) + "\n")
    df.to_csv(
        buffer,
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )

    logger.info(f"Exported {len(df)} bookings to CSV")
    return buffer.getvalue()
