# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides booking fields, screenshots and fake workflow collaborators
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
# Email and remote relay stay off unless a test opts in
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("NOTIFICATION_RELAY_URL", None)

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.config import Settings
from core.models.booking import BookingRecord
from core.services.booking_service import BookingRepository
from core.services.booking_workflow import BookingWorkflow
from core.services.storage_service import Artifact, StorageService

MIB = 1024 * 1024

SCREENSHOT_URL = (
    "https://test-project.supabase.co/storage/v1/object/public/"
    "payment-screenshots/1760890000123-abcd1234.jpg"
)


# =============================================================================
# Fixtures
# =============================================================================

def isolated_settings() -> Settings:
    """Settings from the test environment only; a local .env is never read."""
    return Settings(_env_file=None)


@pytest.fixture
def test_settings():
    """Settings built from the test environment."""
    return isolated_settings()


@pytest.fixture
def booking_fields():
    """A valid booking form submission."""
    return {
        "fullName": "Asha Rao",
        "gender": "Female",
        "phone": "9876543210",
        "dateOfBirth": "1995-04-02",
        "questionConcern": "Will I get the new job offer this month?",
        "preferredPlan": "Quick Clarity - ₹221",
    }


def make_artifact(size: int = 2 * MIB, content_type: str = "image/jpeg", filename: str = "payment.jpg") -> Artifact:
    return Artifact(filename=filename, content_type=content_type, content=b"\xff" * size)


@pytest.fixture
def jpeg_artifact():
    """A conforming 2 MiB JPEG screenshot."""
    return make_artifact()


def stored_booking(row: dict) -> BookingRecord:
    """What the bookings table hands back after an insert."""
    return BookingRecord(
        id="7d3f8e4a-1b2c-4d5e-9f60-a1b2c3d4e5f6",
        created_at=datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc),
        **row,
    )


@pytest.fixture
def fake_storage():
    storage = MagicMock(spec=StorageService)
    storage.upload_payment_screenshot.return_value = SCREENSHOT_URL
    return storage


@pytest.fixture
def fake_bookings():
    bookings = MagicMock(spec=BookingRepository)
    bookings.create.side_effect = stored_booking
    return bookings


@pytest.fixture
def fake_notifier():
    notifier = MagicMock()
    notifier.notify.return_value = {
        "success": True,
        "message": "Notification processed successfully",
        "whatsappUrl": "https://wa.me/916230016403?text=hi",
        "emailAttempted": False,
        "emailSent": False,
        "emailTo": None,
    }
    return notifier


@pytest.fixture
def workflow(test_settings, fake_storage, fake_bookings, fake_notifier):
    """Booking workflow wired to fakes."""
    return BookingWorkflow(
        test_settings,
        storage=fake_storage,
        bookings=fake_bookings,
        notifier=fake_notifier,
    )


@pytest.fixture
def sample_booking_rows():
    """Rows as returned by the bookings table, newest first."""
    return [
        {
            "id": "b-2",
            "full_name": "Rahul Verma",
            "gender": "Male",
            "phone": "9123456780",
            "date_of_birth": "1998-11-20",
            "time_of_birth": "06:45",
            "place_of_birth": "Pune, Maharashtra",
            "question_concern": 'My manager said "maybe" about the promotion.\nWhat does the year hold?',
            "preferred_plan": "Life & Career - ₹351",
            "payment_screenshot_url": None,
            "transaction_number": "Screenshot uploaded",
            "status": "confirmed",
            "created_at": "2026-10-18T14:05:00+00:00",
        },
        {
            "id": "b-1",
            "full_name": "Asha Rao",
            "gender": "Female",
            "phone": "9876543210",
            "date_of_birth": "1995-04-02",
            "time_of_birth": "00:00",
            "place_of_birth": "Not specified",
            "question_concern": "Will I get the new job offer this month?",
            "preferred_plan": "Quick Clarity - ₹221",
            "payment_screenshot_url": SCREENSHOT_URL,
            "transaction_number": "Screenshot uploaded",
            "status": "pending",
            "created_at": "2026-10-17T09:30:00+00:00",
        },
    ]
