# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - booking.py: Booking form, stored record and submission response
# - review.py: Testimonial schemas
# - contact.py: Contact form schemas
# - plan.py: Consultation plan catalog entries and form defaults
# - notification.py: Notification relay payload and response
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Booking Models
# -----------------------------------------------------------------------------
from .booking import (
    BookingForm,
    BookingList,
    BookingRecord,
    BookingResponse,
    BookingStatus,
    FIELD_MESSAGES,
    Gender,
    field_errors,
    field_message,
    validate_booking,
)

# -----------------------------------------------------------------------------
# Testimonial & Contact Models
# -----------------------------------------------------------------------------
from .review import Review, ReviewCreate, ReviewList
from .contact import ContactMessageCreate, ContactMessageResponse

# -----------------------------------------------------------------------------
# Catalog & Relay Models
# -----------------------------------------------------------------------------
from .plan import BookingFormDefaults, Plan, PlanList
from .notification import RelayPayload, RelayResponse

__all__ = [
    # Booking
    "BookingForm",
    "BookingList",
    "BookingRecord",
    "BookingResponse",
    "BookingStatus",
    "FIELD_MESSAGES",
    "Gender",
    "field_errors",
    "field_message",
    "validate_booking",
    # Reviews
    "Review",
    "ReviewCreate",
    "ReviewList",
    # Contact
    "ContactMessageCreate",
    "ContactMessageResponse",
    # Plans
    "BookingFormDefaults",
    "Plan",
    "PlanList",
    # Relay
    "RelayPayload",
    "RelayResponse",
]
