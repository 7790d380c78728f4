# =============================================================================
# core/catalog.py - Static Reference Data
# =============================================================================
# Plans and featured testimonials shipped with the site. Nothing here is
# persisted; edit this file to change prices or copy.
# =============================================================================

from datetime import datetime, timezone

from app.exceptions import PlanNotFoundError
from core.models.plan import Plan
from core.models.review import Review

PLANS: tuple[Plan, ...] = (
    Plan(
        id="placement-job",
        name="Placement/Job Insights",
        price="₹199",
        description="Upcoming Job/Placement Guidance",
        details="Opportunity Timing & Prep Tips",
        duration="10-12 min only",
    ),
    Plan(
        id="quick-clarity",
        name="Quick Clarity",
        price="₹221",
        description="One Question + Current Phase",
        details="Honest Direction",
        duration="8-10 min only",
    ),
    Plan(
        id="life-career",
        name="Life & Career",
        price="₹351",
        description="Career/Studies Growth Direction",
        details="Next 6-12 Months",
        duration="15-18 min only",
        popular=True,
    ),
    Plan(
        id="future-timing",
        name="Future & Timing",
        price="₹501",
        description="Career + Money Opportunity Period",
        details="One Major Block Explained",
        duration="25-30 min only",
    ),
)

PAYMENT_INSTRUCTIONS = (
    "Make payment via UPI/Google Pay/PhonePe to +91 62300-16403. "
    "After payment, upload the screenshot in the booking form and submit."
)


def list_plans() -> list[Plan]:
    return list(PLANS)


def get_plan(plan_id: str) -> Plan:
    """
    Look up a plan by id.

    Raises:
        PlanNotFoundError: If the id is not in the catalog
    """
    for plan in PLANS:
        if plan.id == plan_id:
            return plan
    raise PlanNotFoundError(plan_id, [p.id for p in PLANS])


def resolve_plan_label(plan_id: str | None) -> str:
    """
    Label to pre-select for a ?plan=<id> link.

    Unknown or missing ids resolve to "" so the form starts with no plan.
    """
    if not plan_id:
        return ""
    for plan in PLANS:
        if plan.id == plan_id:
            return plan.label
    return ""


def _featured(review_id: int, name: str, rating: int, text: str, day: int) -> Review:
    return Review(
        id=review_id,
        name=name,
        rating=rating,
        text=text,
        created_at=datetime(2026, 1, day, tzinfo=timezone.utc),
    )


# Shown by the carousel until real reviews exist, newest first
FEATURED_REVIEWS: tuple[Review, ...] = (
    _featured(1, "Priya Sharma", 5, "CosmOracle completely changed my perspective on career decisions. The insights were spot-on!", 25),
    _featured(2, "Rahul Verma", 5, "Got clarity on my job placement timing. Everything happened exactly as predicted. Highly recommend!", 24),
    _featured(3, "Ananya Patel", 5, "Best investment ever! The career guidance helped me land my dream job.", 23),
    _featured(4, "Vikram Singh", 4, "Very accurate predictions about my future timing. The session was insightful and empowering.", 22),
    _featured(5, "Sneha Kulkarni", 5, "Amazing experience! The ₹199 job insights package gave me so much clarity about my career path.", 21),
    _featured(6, "Arjun Deshmukh", 5, "Jeevan Ka GPS indeed! Every prediction about my love life and career was incredibly accurate.", 20),
    _featured(7, "Meera Joshi", 5, "The quick clarity session was worth every rupee. Got exactly the direction I needed!", 19),
    _featured(8, "Karan Malhotra", 4, "Professional and insightful. The future timing predictions helped me plan my business moves.", 18),
)
