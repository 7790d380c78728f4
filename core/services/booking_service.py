# =============================================================================
# core/services/booking_service.py - Booking Persistence
# =============================================================================
# Reads and writes the bookings table. Bookings are append-only from this
# service's point of view: staff change status directly in the dashboard.
# =============================================================================

import logging
from typing import Any

from app.config import Settings
from app.exceptions import PersistenceError
from core.models.booking import BookingRecord
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


class BookingRepository:
    """
    Data access for booking records.

    Translates SupabaseClientError into PersistenceError so callers only
    deal with the application taxonomy.
    """

    def __init__(self, config: Settings):
        self.table = config.BOOKINGS_TABLE

    def create(self, row: dict[str, Any]) -> BookingRecord:
        """
        Insert one booking.

        Args:
            row: Column values (see BookingForm.to_record_row)

        Returns:
            The stored record with server-assigned id, status and created_at

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            stored = SupabaseClient.insert_row(self.table, row)
        except SupabaseClientError as e:
            logger.error(f"Failed to insert booking: {e}")
            raise PersistenceError("create_booking", str(e))

        logger.info(f"Created booking {stored.get('id')} for plan '{row.get('preferred_plan')}'")
        return BookingRecord.model_validate(stored)

    def list_all(self) -> list[BookingRecord]:
        """
        All bookings, newest first.

        Raises:
            PersistenceError: If the query fails
        """
        try:
            rows = SupabaseClient.fetch_rows(self.table, order_by="created_at", desc=True)
        except SupabaseClientError as e:
            logger.error(f"Failed to load bookings: {e}")
            raise PersistenceError("list_bookings", str(e))

        return [BookingRecord.model_validate(row) for row in rows]
