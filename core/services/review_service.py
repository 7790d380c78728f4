# =============================================================================
# core/services/review_service.py - Testimonials
# =============================================================================
# Backs the testimonial carousel and the public "leave a review" dialog.
# =============================================================================

import logging

from app.config import Settings
from app.exceptions import PersistenceError
from core.catalog import FEATURED_REVIEWS
from core.models.review import Review, ReviewCreate, ReviewList
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

DEFAULT_REVIEW_LIMIT = 20


class ReviewService:
    """Reads and writes the reviews table."""

    def __init__(self, config: Settings):
        self.table = config.REVIEWS_TABLE

    def list_recent(self, limit: int = DEFAULT_REVIEW_LIMIT) -> ReviewList:
        """
        Reviews for the carousel, newest first.

        Falls back to the featured testimonials while the table is empty.

        Raises:
            PersistenceError: If the query fails
        """
        try:
            rows = SupabaseClient.fetch_rows(
                self.table,
                columns="id, name, rating, text, created_at",
                order_by="created_at",
                desc=True,
                limit=limit,
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to load reviews: {e}")
            raise PersistenceError("list_reviews", str(e))

        if not rows:
            featured = list(FEATURED_REVIEWS[:limit])
            return ReviewList(reviews=featured, total=len(featured), source="featured")

        reviews = [Review.model_validate(row) for row in rows]
        return ReviewList(reviews=reviews, total=len(reviews), source="database")

    def create(self, review: ReviewCreate) -> Review:
        """
        Store a new testimonial.

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            stored = SupabaseClient.insert_row(self.table, review.model_dump())
        except SupabaseClientError as e:
            logger.error(f"Failed to insert review: {e}")
            raise PersistenceError("create_review", str(e))

        logger.info(f"Review submitted: {review.rating} stars from {review.name}")
        return Review.model_validate(stored)
