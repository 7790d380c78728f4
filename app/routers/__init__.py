# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - bookings.py: Booking form defaults and submission
# - relay.py: send-booking-notification relay (+ CORS preflight)
# - reviews.py: Testimonial carousel and submissions
# - admin.py: Booking dashboard and CSV export
# - plans.py: Plan catalog and the confirmation view
# - contact.py: Contact form
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import bookings
from . import relay
from . import reviews
from . import admin
from . import plans
from . import contact

__all__ = [
    "health",
    "bookings",
    "relay",
    "reviews",
    "admin",
    "plans",
    "contact",
]
