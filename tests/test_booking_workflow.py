# =============================================================================
# tests/test_booking_workflow.py - Booking Submission Workflow Tests
# =============================================================================
# This module contains tests for:
# - Rejection before any I/O (call-count assertions)
# - Screenshot policy (required, JPG/PNG only, 5MB cap)
# - Upload / insert / notify sequencing and failure handling
# - Storage keys and the notifier's two delivery paths
# =============================================================================

import re
from unittest.mock import patch

import httpx
import pytest

from app.exceptions import NotificationError, PersistenceError, UploadError, ValidationError
from core.models.booking import validate_booking
from core.services.booking_workflow import BookingNotifier, BookingOutcome, BookingWorkflow
from core.services.storage_service import StorageService, generate_storage_key
from lib.supabase_client import SupabaseClientError
from tests.conftest import MIB, SCREENSHOT_URL, make_artifact, stored_booking


def assert_no_io(fake_storage, fake_bookings, fake_notifier):
    fake_storage.upload_payment_screenshot.assert_not_called()
    fake_bookings.create.assert_not_called()
    fake_notifier.notify.assert_not_called()


# =============================================================================
# Happy Path
# =============================================================================

class TestSubmit:

    def test_end_to_end_booking(
        self, workflow, booking_fields, jpeg_artifact, fake_storage, fake_bookings, fake_notifier
    ):
        """Asha's booking is stored pending, with a screenshot, and redirects."""
        outcome = workflow.submit(booking_fields, jpeg_artifact)

        fake_storage.upload_payment_screenshot.assert_called_once_with(jpeg_artifact)
        fake_bookings.create.assert_called_once()
        row = fake_bookings.create.call_args.args[0]
        assert row["full_name"] == "Asha Rao"
        assert row["status"] == "pending"
        assert row["payment_screenshot_url"] == SCREENSHOT_URL
        assert row["transaction_number"] == "Screenshot uploaded"

        assert outcome.booking.status == "pending"
        assert outcome.booking.payment_screenshot_url is not None
        assert outcome.redirect_url == "/thank-you"
        assert outcome.notification_sent is True

    def test_notifies_with_booking_summary(self, workflow, booking_fields, jpeg_artifact, fake_notifier):
        workflow.submit(booking_fields, jpeg_artifact)

        payload = fake_notifier.notify.call_args.args[0]
        assert payload["fullName"] == "Asha Rao"
        assert payload["phone"] == "9876543210"
        assert payload["preferredPlan"] == "Quick Clarity - ₹221"

    def test_png_accepted(self, workflow, booking_fields, fake_bookings):
        workflow.submit(booking_fields, make_artifact(content_type="image/png", filename="gpay.png"))

        fake_bookings.create.assert_called_once()

    def test_exactly_five_mib_accepted(self, workflow, booking_fields, fake_bookings):
        workflow.submit(booking_fields, make_artifact(size=5 * MIB))

        fake_bookings.create.assert_called_once()


# =============================================================================
# Rejection Before I/O
# =============================================================================

class TestValidation:

    @pytest.mark.parametrize(
        "field, value",
        [
            ("fullName", "A"),
            ("gender", "Unknown"),
            ("phone", "12345"),
            ("dateOfBirth", ""),
            ("questionConcern", "Help"),
            ("preferredPlan", ""),
        ],
    )
    def test_invalid_fields_never_reach_network(
        self, workflow, booking_fields, jpeg_artifact, fake_storage, fake_bookings, fake_notifier, field, value
    ):
        booking_fields[field] = value

        with pytest.raises(ValidationError) as exc_info:
            workflow.submit(booking_fields, jpeg_artifact)

        assert field in exc_info.value.errors
        assert_no_io(fake_storage, fake_bookings, fake_notifier)

    def test_missing_screenshot(self, workflow, booking_fields, fake_storage, fake_bookings, fake_notifier):
        with pytest.raises(ValidationError) as exc_info:
            workflow.submit(booking_fields, None)

        assert exc_info.value.errors == {"paymentScreenshot": "Payment screenshot is required"}
        assert_no_io(fake_storage, fake_bookings, fake_notifier)

    def test_gif_rejected(self, workflow, booking_fields, fake_storage, fake_bookings, fake_notifier):
        with pytest.raises(ValidationError) as exc_info:
            workflow.submit(booking_fields, make_artifact(content_type="image/gif", filename="pay.gif"))

        message = exc_info.value.errors["paymentScreenshot"]
        assert "JPG or PNG" in message
        assert "image/gif" in message
        assert_no_io(fake_storage, fake_bookings, fake_notifier)

    def test_oversized_rejected(self, workflow, booking_fields, fake_storage, fake_bookings, fake_notifier):
        with pytest.raises(ValidationError) as exc_info:
            workflow.submit(booking_fields, make_artifact(size=6 * MIB))

        message = exc_info.value.errors["paymentScreenshot"]
        assert "5MB" in message
        assert "6.0MB" in message
        assert_no_io(fake_storage, fake_bookings, fake_notifier)

    def test_field_and_screenshot_errors_combined(self, workflow, booking_fields):
        booking_fields["phone"] = "123"

        with pytest.raises(ValidationError) as exc_info:
            workflow.submit(booking_fields, None)

        assert set(exc_info.value.errors) == {"phone", "paymentScreenshot"}


# =============================================================================
# Failure Handling
# =============================================================================

class TestFailures:

    def test_upload_failure_is_fatal(
        self, workflow, booking_fields, jpeg_artifact, fake_storage, fake_bookings, fake_notifier
    ):
        fake_storage.upload_payment_screenshot.side_effect = UploadError("bucket missing")

        with pytest.raises(UploadError):
            workflow.submit(booking_fields, jpeg_artifact)

        fake_bookings.create.assert_not_called()
        fake_notifier.notify.assert_not_called()

    def test_insert_failure_is_fatal(self, workflow, booking_fields, jpeg_artifact, fake_bookings, fake_notifier):
        fake_bookings.create.side_effect = PersistenceError("create_booking", "connection reset")

        with pytest.raises(PersistenceError) as exc_info:
            workflow.submit(booking_fields, jpeg_artifact)

        assert exc_info.value.message == "Something went wrong. Please try again."
        fake_notifier.notify.assert_not_called()

    @pytest.mark.parametrize("error", [NotificationError("relay down"), RuntimeError("unexpected")])
    def test_notification_failure_is_swallowed(
        self, workflow, booking_fields, jpeg_artifact, fake_notifier, error
    ):
        fake_notifier.notify.side_effect = error

        outcome = workflow.submit(booking_fields, jpeg_artifact)

        assert outcome.redirect_url == "/thank-you"
        assert outcome.notification is None
        assert outcome.notification_sent is False


# =============================================================================
# Storage
# =============================================================================

class TestStorage:

    def test_storage_key_format(self):
        key = generate_storage_key("jpg")

        assert re.fullmatch(r"\d{13}-[a-z0-9]{8}\.jpg", key)

    def test_storage_keys_unique(self):
        keys = {generate_storage_key("png") for _ in range(2000)}

        assert len(keys) == 2000

    def test_upload_payment_screenshot(self, test_settings, jpeg_artifact):
        with patch("core.services.storage_service.SupabaseClient") as mock:
            mock.get_public_url.return_value = SCREENSHOT_URL

            url = StorageService(test_settings).upload_payment_screenshot(jpeg_artifact)

        assert url == SCREENSHOT_URL
        kwargs = mock.upload_object.call_args.kwargs
        assert kwargs["bucket"] == "payment-screenshots"
        assert kwargs["content_type"] == "image/jpeg"
        assert kwargs["path"].endswith(".jpg")
        mock.get_public_url.assert_called_once_with("payment-screenshots", kwargs["path"])

    @pytest.mark.parametrize(
        "filename, content_type, extension",
        [
            ("gpay.PNG", "image/png", "png"),
            ("payment", "image/png", "png"),
            ("payment", "image/jpeg", "jpeg"),
        ],
    )
    def test_key_uses_artifact_extension(self, test_settings, filename, content_type, extension):
        artifact = make_artifact(size=1024, content_type=content_type, filename=filename)

        with patch("core.services.storage_service.SupabaseClient") as mock:
            StorageService(test_settings).upload_payment_screenshot(artifact)

        assert mock.upload_object.call_args.kwargs["path"].endswith(f".{extension}")

    def test_upload_error_translated(self, test_settings, jpeg_artifact):
        with patch("core.services.storage_service.SupabaseClient") as mock:
            mock.upload_object.side_effect = SupabaseClientError("Bucket not found", code="UPLOAD_FAILED")

            with pytest.raises(UploadError) as exc_info:
                StorageService(test_settings).upload_payment_screenshot(jpeg_artifact)

        assert exc_info.value.message == "Failed to upload payment screenshot"


# =============================================================================
# Notifier
# =============================================================================

class TestBookingNotifier:

    PAYLOAD = {
        "fullName": "Asha Rao",
        "phone": "9876543210",
        "preferredPlan": "Quick Clarity - ₹221",
        "dateOfBirth": "1995-04-02",
        "questionConcern": "Will I get the new job offer this month?",
    }

    def test_in_process_relay(self, test_settings):
        result = BookingNotifier(test_settings).notify(self.PAYLOAD)

        assert result["success"] is True
        assert result["whatsappUrl"].startswith("https://wa.me/916230016403?text=")
        assert result["emailAttempted"] is False

    def test_remote_relay(self, test_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["apikey"] = request.headers["apikey"]
            return httpx.Response(200, json={"success": True, "whatsappUrl": "https://wa.me/x"})

        config = test_settings.model_copy(
            update={"NOTIFICATION_RELAY_URL": "https://relay.example.com/send-booking-notification"}
        )
        client = httpx.Client(transport=httpx.MockTransport(handler))

        result = BookingNotifier(config, http_client=client).notify(self.PAYLOAD)

        assert result["success"] is True
        assert seen["url"] == "https://relay.example.com/send-booking-notification"
        assert seen["apikey"] == "test-anon-key"

    def test_remote_relay_error(self, test_settings):
        config = test_settings.model_copy(
            update={"NOTIFICATION_RELAY_URL": "https://relay.example.com/send-booking-notification"}
        )
        client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"}))
        )

        with pytest.raises(NotificationError):
            BookingNotifier(config, http_client=client).notify(self.PAYLOAD)

    @pytest.mark.parametrize("body", [["ok"], "ok", 1])
    def test_remote_relay_non_object_response(self, test_settings, body):
        config = test_settings.model_copy(
            update={"NOTIFICATION_RELAY_URL": "https://relay.example.com/send-booking-notification"}
        )
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=body)))

        with pytest.raises(NotificationError):
            BookingNotifier(config, http_client=client).notify(self.PAYLOAD)

    def test_unexpected_relay_response_keeps_booking(
        self, test_settings, booking_fields, jpeg_artifact, fake_storage, fake_bookings
    ):
        """A saved booking still redirects when the relay answers with a list."""
        config = test_settings.model_copy(
            update={"NOTIFICATION_RELAY_URL": "https://relay.example.com/send-booking-notification"}
        )
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=["ok"])))
        workflow = BookingWorkflow(
            config,
            storage=fake_storage,
            bookings=fake_bookings,
            notifier=BookingNotifier(config, http_client=client),
        )

        outcome = workflow.submit(booking_fields, jpeg_artifact)

        fake_bookings.create.assert_called_once()
        assert outcome.redirect_url == "/thank-you"
        assert outcome.notification_sent is False


def test_notification_sent_ignores_non_dict_result(booking_fields):
    row = validate_booking(booking_fields).to_record_row(SCREENSHOT_URL, "Screenshot uploaded")
    outcome = BookingOutcome(booking=stored_booking(row), redirect_url="/thank-you", notification=["ok"])

    assert outcome.notification_sent is False
