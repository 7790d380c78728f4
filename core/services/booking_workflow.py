# =============================================================================
# core/services/booking_workflow.py - Booking Submission Workflow
# =============================================================================
# Orchestrates one booking submission:
#
#   validate fields + screenshot -> upload screenshot -> insert booking
#   -> notify operator (best effort) -> redirect to confirmation
#
# Payment proof policy is strict: a JPG/PNG screenshot of at most
# MAX_UPLOAD_SIZE_MB is required, and a failed upload aborts the submission.
# A screenshot stored before a failed insert is left in the bucket.
# =============================================================================

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from app.config import Settings
from app.exceptions import NotificationError, ValidationError
from core.models.booking import (
    SCREENSHOT_TRANSACTION_MARKER,
    BookingForm,
    BookingRecord,
    validate_booking,
)
from core.models.notification import RelayPayload
from core.services.booking_service import BookingRepository
from core.services.notification_relay import NotificationRelay
from core.services.storage_service import Artifact, StorageService

logger = logging.getLogger(__name__)

ARTIFACT_FIELD = "paymentScreenshot"


class Notifier(Protocol):
    def notify(self, payload: dict[str, Any]) -> dict[str, Any]: ...


@dataclass
class BookingOutcome:
    """Result of a successful submission."""

    booking: BookingRecord
    redirect_url: str
    notification: dict[str, Any] | None = field(default=None)

    @property
    def notification_sent(self) -> bool:
        return isinstance(self.notification, dict) and bool(self.notification.get("success"))


# =============================================================================
# Notification Dispatch
# =============================================================================

class BookingNotifier:
    """
    Delivers booking summaries to the notification relay.

    When NOTIFICATION_RELAY_URL is configured the payload is POSTed there,
    authenticated with the Supabase anon key like a hosted function call.
    Otherwise the in-process relay handles it directly.
    """

    def __init__(
        self,
        config: Settings,
        relay: NotificationRelay | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.config = config
        self.relay = relay or NotificationRelay(config)
        self._http_client = http_client

    def notify(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Send one payload to the relay.

        Returns:
            The relay's JSON response

        Raises:
            NotificationError: If the relay is unreachable, rejects the payload,
                or answers with anything but a JSON object
        """
        if not self.config.NOTIFICATION_RELAY_URL:
            return self.relay.process(RelayPayload.model_validate(payload)).model_dump(by_alias=True)

        headers = {
            "Authorization": f"Bearer {self.config.SUPABASE_ANON_KEY}",
            "apikey": self.config.SUPABASE_ANON_KEY,
        }
        client = self._http_client or httpx
        try:
            response = client.post(
                self.config.NOTIFICATION_RELAY_URL,
                json=payload,
                headers=headers,
                timeout=self.config.HTTP_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise NotificationError(str(e))

        if not isinstance(result, dict):
            raise NotificationError(f"Relay returned {type(result).__name__}, expected a JSON object")
        return result


# =============================================================================
# Workflow
# =============================================================================

class BookingWorkflow:
    """
    Booking submission orchestrator.

    All collaborators are injected so the sequence can be exercised with
    fakes and call counts asserted.

    Example:
        workflow = BookingWorkflow(
            settings,
            storage=StorageService(settings),
            bookings=BookingRepository(settings),
            notifier=BookingNotifier(settings),
        )
        outcome = workflow.submit(form_fields, artifact)
        # outcome.redirect_url == "/thank-you"
    """

    def __init__(
        self,
        config: Settings,
        storage: StorageService,
        bookings: BookingRepository,
        notifier: Notifier,
    ):
        self.config = config
        self.storage = storage
        self.bookings = bookings
        self.notifier = notifier

    def check_artifact(self, artifact: Artifact | None) -> str | None:
        """
        Check the payment screenshot against the upload policy.

        Returns:
            An error message, or None when the screenshot is acceptable
        """
        if artifact is None or artifact.size == 0:
            return "Payment screenshot is required"

        content_type = (artifact.content_type or "").lower()
        if content_type not in self.config.allowed_image_types_list:
            return f"Please upload a JPG or PNG file (got {content_type or 'unknown type'})"

        if artifact.size > self.config.max_upload_size_bytes:
            return (
                f"File size must be less than {self.config.MAX_UPLOAD_SIZE_MB}MB "
                f"(got {artifact.size_mb:.1f}MB)"
            )

        return None

    def validate(self, fields: Mapping[str, Any], artifact: Artifact | None) -> BookingForm:
        """
        Validate the form and the screenshot together.

        Raises:
            ValidationError: With every offending field, before any I/O
        """
        errors: dict[str, str] = {}
        form = None

        try:
            form = validate_booking(fields)
        except ValidationError as e:
            errors.update(e.errors)

        artifact_error = self.check_artifact(artifact)
        if artifact_error:
            errors[ARTIFACT_FIELD] = artifact_error

        if errors:
            logger.info(f"Booking rejected by validation: {sorted(errors)}")
            raise ValidationError(errors)

        return form

    def submit(self, fields: Mapping[str, Any], artifact: Artifact | None) -> BookingOutcome:
        """
        Run the full submission sequence.

        Args:
            fields: Raw form values keyed by form field name
            artifact: The payment screenshot, if one was attached

        Returns:
            BookingOutcome with the stored record and confirmation URL

        Raises:
            ValidationError: Invalid fields or screenshot (no I/O performed)
            UploadError: Screenshot could not be stored
            PersistenceError: Booking could not be inserted
        """
        form = self.validate(fields, artifact)

        screenshot_url = self.storage.upload_payment_screenshot(artifact)

        booking = self.bookings.create(
            form.to_record_row(
                payment_screenshot_url=screenshot_url,
                transaction_number=SCREENSHOT_TRANSACTION_MARKER,
            )
        )

        notification = None
        try:
            notification = self.notifier.notify(form.to_notification_payload())
        except Exception as e:
            logger.warning(f"Booking {booking.id} saved but notification failed: {e}")

        return BookingOutcome(
            booking=booking,
            redirect_url=self.config.CONFIRMATION_PATH,
            notification=notification,
        )
