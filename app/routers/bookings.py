# =============================================================================
# app/routers/bookings.py - Booking Submission
# =============================================================================
# Receives the booking form as multipart data (fields + payment screenshot)
# and hands it to the booking workflow.
#
# The handler is a plain def: FastAPI runs it in the threadpool, so the
# blocking Supabase and httpx calls do not stall the event loop.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile

from app.dependencies import BookingWorkflowDep, SettingsDep
from core.catalog import PAYMENT_INSTRUCTIONS, list_plans, resolve_plan_label
from core.models.booking import BookingResponse
from core.models.plan import BookingFormDefaults
from core.services.storage_service import Artifact

logger = logging.getLogger(__name__)

router = APIRouter()

OptionalField = Annotated[str | None, Form()]


@router.get("/form", response_model=BookingFormDefaults)
async def get_form_defaults(
    config: SettingsDep,
    plan: Annotated[str | None, Query(description="Plan id from a pricing card link")] = None,
):
    """
    Initial values for the booking form.

    Opening /booking?plan=quick-clarity pre-selects "Quick Clarity - ₹221".
    Unknown plan ids leave the plan empty.
    """
    return BookingFormDefaults(
        preferredPlan=resolve_plan_label(plan),
        plans=list_plans(),
        allowedImageTypes=config.allowed_image_types_list,
        maxUploadSizeMb=config.MAX_UPLOAD_SIZE_MB,
        paymentInstructions=PAYMENT_INSTRUCTIONS,
    )


@router.post("", response_model=BookingResponse, status_code=201)
def submit_booking(
    workflow: BookingWorkflowDep,
    full_name: Annotated[str | None, Form(alias="fullName")] = None,
    gender: OptionalField = None,
    phone: OptionalField = None,
    date_of_birth: Annotated[str | None, Form(alias="dateOfBirth")] = None,
    time_of_birth: Annotated[str | None, Form(alias="timeOfBirth")] = None,
    place_of_birth: Annotated[str | None, Form(alias="placeOfBirth")] = None,
    question_concern: Annotated[str | None, Form(alias="questionConcern")] = None,
    preferred_plan: Annotated[str | None, Form(alias="preferredPlan")] = None,
    payment_screenshot: Annotated[UploadFile | None, File(alias="paymentScreenshot")] = None,
):
    """
    Submit a consultation booking.

    This endpoint:
    1. Validates every field and the payment screenshot
    2. Uploads the screenshot to storage
    3. Inserts the booking (status "pending")
    4. Notifies the operator (best effort)

    Returns the stored booking and the confirmation URL to navigate to.
    Every field is optional at the HTTP layer so that missing values are
    reported through the booking form's own messages.
    """
    fields = {
        "fullName": full_name,
        "gender": gender,
        "phone": phone,
        "dateOfBirth": date_of_birth,
        "timeOfBirth": time_of_birth,
        "placeOfBirth": place_of_birth,
        "questionConcern": question_concern,
        "preferredPlan": preferred_plan,
    }
    # Absent fields are dropped so they surface as "missing"
    fields = {k: v for k, v in fields.items() if v is not None}

    artifact = None
    if payment_screenshot is not None:
        artifact = Artifact(
            filename=payment_screenshot.filename or "screenshot",
            content_type=payment_screenshot.content_type or "",
            content=payment_screenshot.file.read(),
        )

    outcome = workflow.submit(fields, artifact)

    return BookingResponse(
        booking=outcome.booking,
        redirect_url=outcome.redirect_url,
        notification_sent=outcome.notification_sent,
    )
