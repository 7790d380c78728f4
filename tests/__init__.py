# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CosmOracle API:
# - test_models.py: Booking form and request model validation
# - test_booking_workflow.py: Submission sequencing, screenshot policy, storage
# - test_notification_relay.py: WhatsApp link, Resend email, body parsing
# - test_export.py: Admin CSV export
# - test_catalog.py: Plan catalog lookups
# - test_api.py: Endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
