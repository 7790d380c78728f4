# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .booking_service import BookingRepository
from .booking_workflow import BookingNotifier, BookingOutcome, BookingWorkflow
from .contact_service import ContactService
from .export_service import export_bookings_csv, export_filename
from .notification_relay import NotificationRelay, parse_payload
from .review_service import ReviewService
from .storage_service import Artifact, StorageService, generate_storage_key

__all__ = [
    "Artifact",
    "BookingNotifier",
    "BookingOutcome",
    "BookingRepository",
    "BookingWorkflow",
    "ContactService",
    "NotificationRelay",
    "ReviewService",
    "StorageService",
    "export_bookings_csv",
    "export_filename",
    "generate_storage_key",
    "parse_payload",
]
