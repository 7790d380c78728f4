# =============================================================================
# core/services/notification_relay.py - Booking Notification Relay
# =============================================================================
# Turns a just-created booking into operator notifications:
# 1. Compose a fixed-template summary
# 2. Derive a WhatsApp deep link to the operator (always)
# 3. Email the summary through Resend (only when RESEND_API_KEY is set)
#
# Delivery failures never raise out of process(); they are logged and
# reported in the response. Only a malformed payload is an error, and that
# is handled by the router before process() is called.
# =============================================================================

import html
import json
import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.exceptions import MalformedRequestError
from core.models.notification import RelayPayload, RelayResponse
from lib.utils import excerpt, run_optional_step

logger = logging.getLogger(__name__)

WHATSAPP_URL_TEMPLATE = "https://wa.me/{number}?text={text}"

QUESTION_EXCERPT_LENGTH = 100

NOT_PROVIDED = "Not provided"

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def parse_payload(body: bytes | str) -> RelayPayload:
    """
    Parse a raw relay request body.

    Raises:
        MalformedRequestError: If the body is not JSON, not an object, or
            lacks fullName, phone or preferredPlan
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRequestError(f"Invalid JSON body: {e}")

    if not isinstance(data, dict):
        raise MalformedRequestError("Request body must be a JSON object")

    try:
        return RelayPayload.model_validate(data)
    except PydanticValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise MalformedRequestError(f"Invalid notification payload: {', '.join(fields)}")


class NotificationRelay:
    """
    Stateless notification relay.

    Args:
        config: Application settings (operator contacts, Resend credentials)
        http_client: Optional httpx.Client used for the email call; a
            short-lived client is created per call when omitted
    """

    def __init__(self, config: Settings, http_client: httpx.Client | None = None):
        self.config = config
        self._http_client = http_client

    # -------------------------------------------------------------------------
    # Message Composition
    # -------------------------------------------------------------------------

    def compose_message(self, payload: RelayPayload) -> str:
        """Plain-text summary used for the WhatsApp link."""
        question = excerpt(payload.question_concern, QUESTION_EXCERPT_LENGTH) or NOT_PROVIDED

        lines = [
            "🌟 New CosmOracle Booking!",
            "",
            f"👤 Name: {payload.full_name}",
            f"📱 Phone: {payload.phone}",
            f"📋 Plan: {payload.preferred_plan}",
            f"🎂 DOB: {payload.date_of_birth or NOT_PROVIDED}",
            f"❓ Question: {question}...",
        ]
        if payload.transaction_number:
            lines.append(f"💳 Transaction: {payload.transaction_number}")
        lines += ["", "Please verify payment and contact the client."]
        return "\n".join(lines)

    def whatsapp_url(self, message: str) -> str:
        return WHATSAPP_URL_TEMPLATE.format(
            number=self.config.ADMIN_WHATSAPP_NUMBER,
            text=quote(message, safe=_URI_COMPONENT_SAFE),
        )

    def compose_email_html(self, payload: RelayPayload) -> str:
        """HTML body for the operator email. All user input is escaped."""
        name = html.escape(payload.full_name)
        phone = html.escape(payload.phone)
        plan = html.escape(payload.preferred_plan)
        dob = html.escape(payload.date_of_birth or NOT_PROVIDED)
        question = html.escape(payload.question_concern or NOT_PROVIDED)

        transaction = ""
        if payload.transaction_number:
            transaction = (
                f'<p style="margin: 10px 0;"><strong>💳 Transaction:</strong> '
                f"{html.escape(payload.transaction_number)}</p>"
            )

        return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #7c3aed; border-bottom: 2px solid #7c3aed; padding-bottom: 10px;">
    🌟 New CosmOracle Booking!
  </h1>
  <div style="background: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p style="margin: 10px 0;"><strong>👤 Name:</strong> {name}</p>
    <p style="margin: 10px 0;"><strong>📱 Phone:</strong> {phone}</p>
    <p style="margin: 10px 0;"><strong>📋 Plan:</strong> {plan}</p>
    <p style="margin: 10px 0;"><strong>🎂 Date of Birth:</strong> {dob}</p>
    {transaction}
    <p style="margin: 10px 0;"><strong>❓ Question/Concern:</strong></p>
    <p style="background: white; padding: 15px; border-radius: 4px; border-left: 4px solid #7c3aed;">
      {question}
    </p>
  </div>
  <div style="background: #fff3cd; padding: 15px; border-radius: 8px; margin: 20px 0;">
    <p style="margin: 0; color: #856404;">
      ⚠️ <strong>Action Required:</strong> Please verify payment and contact the client.
    </p>
  </div>
  <p style="color: #666; font-size: 12px; margin-top: 30px;">
    This is an automated notification from CosmOracle booking system.
  </p>
</div>
"""

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    def send_email(self, payload: RelayPayload) -> bool:
        """
        Send the operator email through Resend.

        Returns:
            True on a 2xx response, False otherwise

        Raises:
            httpx.HTTPError: On transport failures (caught by process())
        """
        request = {
            "from": self.config.NOTIFICATION_FROM_EMAIL,
            "to": [self.config.ADMIN_EMAIL],
            "subject": f"🌟 New Booking: {payload.full_name} - {payload.preferred_plan}",
            "html": self.compose_email_html(payload),
        }
        headers = {"Authorization": f"Bearer {self.config.RESEND_API_KEY}"}

        client = self._http_client or httpx
        response = client.post(
            self.config.RESEND_API_URL,
            json=request,
            headers=headers,
            timeout=self.config.HTTP_TIMEOUT_SECONDS,
        )

        if response.is_success:
            logger.info(f"Booking email sent to {self.config.ADMIN_EMAIL}")
            return True

        logger.error(f"Email sending failed ({response.status_code}): {response.text}")
        return False

    def process(self, payload: RelayPayload) -> RelayResponse:
        """
        Handle one booking notification.

        The WhatsApp link is always returned. Email is attempted only when
        a Resend key is configured, and its outcome never changes `success`.
        """
        logger.info(f"New booking notification: {payload.full_name} / {payload.preferred_plan}")

        message = self.compose_message(payload)
        whatsapp_url = self.whatsapp_url(message)

        if not self.config.email_enabled:
            logger.info("RESEND_API_KEY not configured - skipping email notification")
            return RelayResponse(whatsapp_url=whatsapp_url)

        email = run_optional_step("email", lambda: self.send_email(payload))

        return RelayResponse(
            whatsapp_url=whatsapp_url,
            email_attempted=True,
            email_sent=bool(email.ok and email.value),
            email_to=self.config.ADMIN_EMAIL,
        )
