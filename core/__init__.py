# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the booking site's business logic:
# - models/: Pydantic schemas for data validation
# - services/: Booking workflow, persistence, storage, notifications, export
# - catalog.py: Static plan catalog and featured testimonials
#
# Routers stay thin: request parsing lives in app/, everything else here.
# =============================================================================
