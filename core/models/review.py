# =============================================================================
# core/models/review.py - Testimonial Schemas
# =============================================================================

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """
    A testimonial submitted from the public review dialog.

    Name and text are trimmed before the non-empty check, so whitespace-only
    values are rejected.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5, description="Star rating, 1 to 5")
    text: str = Field(..., min_length=1, max_length=1000)


class Review(BaseModel):
    """A row from the reviews table."""

    id: UUID | str | int
    name: str
    rating: int = Field(..., ge=1, le=5)
    text: str
    created_at: datetime | None = None


class ReviewList(BaseModel):
    """
    Carousel listing, newest first.

    `source` is "featured" when the table had no rows and the built-in
    testimonials were returned instead.
    """

    reviews: list[Review] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    source: Literal["database", "featured"] = "database"
