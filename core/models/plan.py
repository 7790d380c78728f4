# =============================================================================
# core/models/plan.py - Consultation Plan Schemas
# =============================================================================
# A plan is one purchasable consultation offering. Plans are static reference
# data compiled into core/catalog.py, never persisted. Bookings store the
# plan's display label, not its id.
# =============================================================================

from pydantic import BaseModel, Field, computed_field


class Plan(BaseModel):
    """
    One entry in the plan catalog.

    Example:
        {
            "id": "quick-clarity",
            "name": "Quick Clarity",
            "price": "₹221",
            "label": "Quick Clarity - ₹221",
            "duration": "8-10 min only"
        }
    """

    # URL-safe identifier used in /booking?plan=<id> links
    id: str = Field(..., pattern=r"^[a-z0-9-]+$")

    name: str
    price: str
    description: str = ""
    details: str = ""
    duration: str = ""

    # Highlighted on the pricing page
    popular: bool = False

    @computed_field
    @property
    def label(self) -> str:
        """Display label, also the value stored in bookings.preferred_plan."""
        return f"{self.name} - {self.price}"


class PlanList(BaseModel):
    plans: list[Plan] = Field(default_factory=list)


class BookingFormDefaults(BaseModel):
    """
    Initial values for the booking form.

    `preferredPlan` is pre-selected when the page was opened from a plan
    card link and the plan id is known; otherwise it is empty.
    """

    preferredPlan: str = ""
    timeOfBirth: str = ""
    placeOfBirth: str = ""
    plans: list[Plan] = Field(default_factory=list)
    allowedImageTypes: list[str] = Field(default_factory=list)
    maxUploadSizeMb: int = 5
    paymentInstructions: str = ""
