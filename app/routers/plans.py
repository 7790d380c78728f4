# =============================================================================
# app/routers/plans.py - Plan Catalog & Confirmation View
# =============================================================================

from fastapi import APIRouter

from core.catalog import get_plan, list_plans
from core.models.plan import Plan, PlanList

router = APIRouter()

# Separate router so the confirmation view lives outside /api/v1
pages_router = APIRouter()


@router.get("/plans", response_model=PlanList)
async def get_plans():
    """The consultation plans shown on the pricing cards."""
    return PlanList(plans=list_plans())


@router.get("/plans/{plan_id}", response_model=Plan)
async def get_plan_by_id(plan_id: str):
    """Look up a single plan. Unknown ids return 404 PLAN_NOT_FOUND."""
    return get_plan(plan_id)


@pages_router.get("/thank-you")
async def thank_you():
    """Confirmation view shown after a successful booking."""
    return {
        "title": "Booking Received!",
        "message": (
            "Thank you for booking your cosmic session. We will verify your "
            "payment and contact you on WhatsApp shortly."
        ),
        "home_url": "/",
    }
