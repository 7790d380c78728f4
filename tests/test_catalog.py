# =============================================================================
# tests/test_catalog.py - Plan Catalog Tests
# =============================================================================

import pytest

from app.exceptions import PlanNotFoundError
from core.catalog import FEATURED_REVIEWS, get_plan, list_plans, resolve_plan_label


def test_plans_in_price_order():
    plans = list_plans()

    assert [p.id for p in plans] == ["placement-job", "quick-clarity", "life-career", "future-timing"]
    assert [p.price for p in plans] == ["₹199", "₹221", "₹351", "₹501"]


def test_single_popular_plan():
    popular = [p.id for p in list_plans() if p.popular]

    assert popular == ["life-career"]


def test_plan_ids_unique():
    ids = [p.id for p in list_plans()]

    assert len(ids) == len(set(ids))


def test_get_plan():
    assert get_plan("future-timing").label == "Future & Timing - ₹501"


def test_get_unknown_plan():
    with pytest.raises(PlanNotFoundError) as exc_info:
        get_plan("tarot-deluxe")

    assert exc_info.value.status_code == 404
    assert "quick-clarity" in exc_info.value.suggestion


@pytest.mark.parametrize(
    "plan_id, label",
    [
        ("quick-clarity", "Quick Clarity - ₹221"),
        ("placement-job", "Placement/Job Insights - ₹199"),
        ("unknown-plan", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_resolve_plan_label(plan_id, label):
    assert resolve_plan_label(plan_id) == label


def test_featured_reviews_newest_first():
    dates = [review.created_at for review in FEATURED_REVIEWS]

    assert dates == sorted(dates, reverse=True)
    assert all(1 <= review.rating <= 5 for review in FEATURED_REVIEWS)
