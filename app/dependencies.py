# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for settings and services.
# These are injected into route handlers using Depends(), and tests replace
# them through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.config import Settings, get_settings
from core.services.booking_service import BookingRepository
from core.services.booking_workflow import BookingNotifier, BookingWorkflow
from core.services.contact_service import ContactService
from core.services.notification_relay import NotificationRelay
from core.services.review_service import ReviewService
from core.services.storage_service import StorageService


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_booking_repository(config: SettingsDep) -> BookingRepository:
    return BookingRepository(config)


def get_notification_relay(config: SettingsDep) -> NotificationRelay:
    return NotificationRelay(config)


def get_booking_workflow(
    config: SettingsDep,
    bookings: Annotated[BookingRepository, Depends(get_booking_repository)],
    relay: Annotated[NotificationRelay, Depends(get_notification_relay)],
) -> BookingWorkflow:
    """Assemble the booking workflow with its production collaborators."""
    return BookingWorkflow(
        config,
        storage=StorageService(config),
        bookings=bookings,
        notifier=BookingNotifier(config, relay=relay),
    )


def get_review_service(config: SettingsDep) -> ReviewService:
    return ReviewService(config)


def get_contact_service(config: SettingsDep) -> ContactService:
    return ContactService(config)


# Type aliases for dependency injection
BookingRepositoryDep = Annotated[BookingRepository, Depends(get_booking_repository)]
BookingWorkflowDep = Annotated[BookingWorkflow, Depends(get_booking_workflow)]
NotificationRelayDep = Annotated[NotificationRelay, Depends(get_notification_relay)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
