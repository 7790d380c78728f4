# =============================================================================
# app/routers/admin.py - Booking Dashboard
# =============================================================================
# Table view and CSV export of all bookings. The dashboard is not protected;
# restrict access at the hosting layer if needed.
# =============================================================================

import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.dependencies import BookingRepositoryDep
from core.models.booking import BookingList
from core.services.export_service import export_bookings_csv, export_filename

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/bookings", response_model=BookingList)
def list_bookings(bookings: BookingRepositoryDep):
    """All bookings, newest first."""
    records = bookings.list_all()
    return BookingList(bookings=records, total=len(records))


@router.get("/bookings/export")
def export_bookings(bookings: BookingRepositoryDep):
    """
    Download all bookings as CSV.

    Returns 404 "No bookings to export" when there are none; no file is
    produced in that case.
    """
    csv_content = export_bookings_csv(bookings.list_all())
    filename = export_filename()

    return StreamingResponse(
        iter([csv_content]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
        }
    )
