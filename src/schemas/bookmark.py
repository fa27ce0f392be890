"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from core.sanitize import sanitize_text

UPDATABLE_FIELDS = ("title", "url", "description", "rating")


class BookmarkCreate(BaseModel):
    """Validated, sanitized record for a new bookmark."""

    title: str
    url: str
    description: str = ""
    rating: float


class BookmarkUpdate(BaseModel):
    """
    Sparse set of field changes for an existing bookmark.

    Only fields that were explicitly set are written; use
    `model_dump(exclude_unset=True)` to get them.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: float | None = None


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Title and description are sanitized on the way out as well as on the way
    in, so rows written by other clients of the table are still safe to render.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str
    rating: float

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v: str | None) -> str:
        """Escape unsafe markup in free-text fields."""
        return sanitize_text(v)

    @field_serializer("rating")
    def serialize_rating(self, rating: float) -> int | float:
        """Render whole-number ratings as integers (5 rather than 5.0)."""
        return int(rating) if float(rating).is_integer() else rating
