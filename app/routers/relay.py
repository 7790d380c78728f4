# =============================================================================
# app/routers/relay.py - Notification Relay Endpoint
# =============================================================================
# POST /functions/v1/send-booking-notification
#
# Mirrors the hosted-function contract the booking page was built against:
# - OPTIONS answers CORS preflight with an empty 200
# - POST always returns 200 with the relay status, unless the body cannot
#   be parsed, in which case it returns 500 {"error": ...}
# =============================================================================

import logging

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.dependencies import NotificationRelayDep
from app.exceptions import MalformedRequestError
from core.services.notification_relay import parse_payload

logger = logging.getLogger(__name__)

router = APIRouter()

RELAY_PATH = "/send-booking-notification"

# Any origin may call the relay, independent of the API's CORS settings
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": (
        "authorization, x-client-info, apikey, content-type"
    ),
}


def preflight_response() -> Response:
    """CORS preflight: empty 200."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.options(RELAY_PATH)
async def relay_preflight():
    return preflight_response()


@router.post(RELAY_PATH)
async def send_booking_notification(request: Request, relay: NotificationRelayDep):
    """
    Notify the operator about a new booking.

    Body: {fullName, phone, preferredPlan, dateOfBirth?, questionConcern?, transactionNumber?}

    Returns {success, message, whatsappUrl, emailAttempted, emailSent, emailTo}.
    """
    body = await request.body()

    try:
        payload = parse_payload(body)
    except MalformedRequestError as e:
        logger.error(f"Error in send-booking-notification: {e.message}")
        return JSONResponse(status_code=500, content=e.to_dict(), headers=CORS_HEADERS)

    # Email delivery uses blocking httpx
    result = await run_in_threadpool(relay.process, payload)

    return JSONResponse(
        status_code=200,
        content=result.model_dump(by_alias=True),
        headers=CORS_HEADERS,
    )
