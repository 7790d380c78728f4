# =============================================================================
# app/routers/reviews.py - Testimonials API
# =============================================================================
# Feeds the testimonial carousel and accepts new reviews from the public
# "share your experience" dialog.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import ReviewServiceDep
from core.models.review import Review, ReviewCreate, ReviewList

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ReviewList)
def list_reviews(
    reviews: ReviewServiceDep,
    limit: Annotated[int, Query(ge=1, le=100, description="Max reviews")] = 20,
):
    """
    Reviews for the carousel, newest first.

    While no reviews have been submitted, the featured testimonials are
    returned with `source: "featured"`.
    """
    return reviews.list_recent(limit=limit)


@router.post("", response_model=Review, status_code=201)
def submit_review(review: ReviewCreate, reviews: ReviewServiceDep):
    """
    Submit a testimonial.

    - **name**: Author name (non-empty)
    - **rating**: 1 to 5 stars
    - **text**: Review body (non-empty)
    """
    return reviews.create(review)
