# =============================================================================
# core/models/booking.py - Booking Schemas
# =============================================================================
# These models define the contract for consultation bookings:
# - BookingForm: the submitted form, with every field constraint declared once
# - BookingRecord: a row as stored in the bookings table
# - BookingResponse: what the API returns after a successful submission
#
# The same BookingForm drives both rejection (validate_booking) and the
# field-level messages rendered next to each input (FIELD_MESSAGES).
# =============================================================================

from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError

# Stored when the visitor leaves the optional birth details blank
DEFAULT_TIME_OF_BIRTH = "00:00"
DEFAULT_PLACE_OF_BIRTH = "Not specified"

# Proof-of-payment marker recorded alongside an uploaded screenshot
SCREENSHOT_TRANSACTION_MARKER = "Screenshot uploaded"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class BookingStatus(str, Enum):
    """
    Known booking states.

    New bookings are always pending. Staff move them on out-of-band,
    and may use labels outside this enum, so stored status stays a str.
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# =============================================================================
# Field Messages
# =============================================================================
# Keyed by form field, then by pydantic error type. "default" covers any
# error type not listed explicitly.

FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "fullName": {
        "default": "Name must be at least 2 characters",
        "string_too_long": "Name must be at most 100 characters",
    },
    "gender": {
        "default": "Please select your gender",
    },
    "phone": {
        "default": "Enter a valid phone number",
    },
    "dateOfBirth": {
        "default": "Enter a valid date of birth",
        "missing": "Date of birth is required",
        "value_error": "Date of birth cannot be in the future",
    },
    "timeOfBirth": {
        "default": "Enter time of birth as HH:MM",
    },
    "placeOfBirth": {
        "default": "Place of birth must be at most 200 characters",
    },
    "questionConcern": {
        "default": "Please describe your concern (min 10 characters)",
        "string_too_long": "Please keep your concern under 1000 characters",
    },
    "preferredPlan": {
        "default": "Please select a plan",
    },
}


class BookingForm(BaseModel):
    """
    A consultation booking as submitted from the booking page.

    Accepts the form's camelCase names (fullName, dateOfBirth, ...) and
    the snake_case attribute names interchangeably.

    Example:
        {
            "fullName": "Asha Rao",
            "gender": "Female",
            "phone": "9876543210",
            "dateOfBirth": "1995-04-02",
            "questionConcern": "Will I get the new job offer this month?",
            "preferredPlan": "Quick Clarity - ₹221"
        }
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    full_name: str = Field(..., alias="fullName", min_length=2, max_length=100)

    gender: Gender = Field(..., alias="gender")

    # Separators are stripped before the length/pattern check
    phone: str = Field(
        ...,
        alias="phone",
        min_length=10,
        max_length=15,
        pattern=r"^\+?\d+$",
    )

    date_of_birth: date = Field(..., alias="dateOfBirth")

    time_of_birth: time | None = Field(default=None, alias="timeOfBirth")

    place_of_birth: str | None = Field(default=None, alias="placeOfBirth", max_length=200)

    question_concern: str = Field(
        ...,
        alias="questionConcern",
        min_length=10,
        max_length=1000,
    )

    # Plan label, e.g. "Quick Clarity - ₹221"
    preferred_plan: str = Field(..., alias="preferredPlan", min_length=1)

    @field_validator("phone", mode="before")
    @classmethod
    def strip_phone_separators(cls, value: Any) -> Any:
        if isinstance(value, str):
            for separator in (" ", "-", "(", ")"):
                value = value.replace(separator, "")
        return value

    @field_validator("time_of_birth", "place_of_birth", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("date_of_birth")
    @classmethod
    def not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("date of birth is in the future")
        return value

    def to_record_row(
        self,
        payment_screenshot_url: str | None,
        transaction_number: str | None,
    ) -> dict[str, Any]:
        """Build the bookings table row for this submission."""
        return {
            "full_name": self.full_name,
            "gender": self.gender.value,
            "phone": self.phone,
            "date_of_birth": self.date_of_birth.isoformat(),
            "time_of_birth": (
                self.time_of_birth.strftime("%H:%M")
                if self.time_of_birth else DEFAULT_TIME_OF_BIRTH
            ),
            "place_of_birth": self.place_of_birth or DEFAULT_PLACE_OF_BIRTH,
            "question_concern": self.question_concern,
            "preferred_plan": self.preferred_plan,
            "payment_screenshot_url": payment_screenshot_url,
            "transaction_number": transaction_number,
            "status": BookingStatus.PENDING.value,
        }

    def to_notification_payload(self) -> dict[str, Any]:
        """The subset of fields forwarded to the notification relay."""
        return {
            "fullName": self.full_name,
            "phone": self.phone,
            "preferredPlan": self.preferred_plan,
            "dateOfBirth": self.date_of_birth.isoformat(),
            "questionConcern": self.question_concern,
        }


# Attribute name -> form field name, for errors reported by attribute
_ALIASES = {name: field.alias or name for name, field in BookingForm.model_fields.items()}


def field_message(field: str, error_type: str) -> str:
    """Look up the user-facing message for one field error."""
    messages = FIELD_MESSAGES.get(field, {})
    return messages.get(error_type) or messages.get("default") or "Invalid value"


def field_errors(exc: PydanticValidationError) -> dict[str, str]:
    """
    Flatten a pydantic ValidationError into {field: message}.

    Only the first error per field is kept, matching how the form shows
    one message under each input.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        field = _ALIASES.get(str(loc[0]), str(loc[0]))
        errors.setdefault(field, field_message(field, error.get("type", "")))
    return errors


def validate_booking(fields: Mapping[str, Any]) -> BookingForm:
    """
    Validate raw form fields against BookingForm.

    Args:
        fields: Submitted values keyed by form field name

    Returns:
        The parsed BookingForm

    Raises:
        ValidationError: With one message per offending field
    """
    try:
        return BookingForm.model_validate(dict(fields))
    except PydanticValidationError as e:
        raise ValidationError(field_errors(e))


class BookingRecord(BaseModel):
    """A row from the bookings table."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID | str
    full_name: str
    gender: str
    phone: str
    date_of_birth: date
    time_of_birth: str | None = None
    place_of_birth: str | None = None
    question_concern: str
    preferred_plan: str
    payment_screenshot_url: str | None = None
    transaction_number: str | None = None
    status: str = BookingStatus.PENDING.value
    created_at: datetime | None = None


class BookingResponse(BaseModel):
    """
    Returned by POST /bookings.

    `redirect_url` is the confirmation view the client should navigate to;
    it is returned whether or not the notification went out.
    """

    booking: BookingRecord
    redirect_url: str
    notification_sent: bool = Field(
        default=False,
        description="Whether the notification relay accepted the booking"
    )


class BookingList(BaseModel):
    """Admin table listing, newest first."""

    bookings: list[BookingRecord] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
