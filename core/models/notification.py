# =============================================================================
# core/models/notification.py - Notification Relay Schemas
# =============================================================================
# Wire contract of the send-booking-notification relay:
# - RelayPayload: JSON body posted by the booking workflow
# - RelayResponse: status of what the relay attempted
#
# Both use the camelCase names on the wire.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class RelayPayload(BaseModel):
    """
    Summary of a just-created booking.

    Only name, phone and plan are required; the rest are included when the
    caller has them. Values are relayed as given: not trimmed, and numbers
    (a phone sent as 9876543210) are accepted as their string form.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    full_name: str = Field(..., alias="fullName", min_length=1)
    phone: str = Field(..., alias="phone", min_length=1)
    preferred_plan: str = Field(..., alias="preferredPlan", min_length=1)
    date_of_birth: str | None = Field(default=None, alias="dateOfBirth")
    question_concern: str | None = Field(default=None, alias="questionConcern")
    transaction_number: str | None = Field(default=None, alias="transactionNumber")


class RelayResponse(BaseModel):
    """
    Result of one relay invocation.

    `success` is true whenever the payload was well-formed; email delivery
    is reported separately and never flips it.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Notification processed successfully"
    whatsapp_url: str = Field(..., alias="whatsappUrl")
    email_attempted: bool = Field(default=False, alias="emailAttempted")
    email_sent: bool = Field(default=False, alias="emailSent")
    email_to: str | None = Field(default=None, alias="emailTo")
