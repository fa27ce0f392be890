"""Bookmark model for storing bookmarks."""
from sqlalchemy import Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Bookmark(Base):
    """Bookmark model - a titled, rated URL with an optional description."""

    __tablename__ = "bookmarks"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    rating: Mapped[float] = mapped_column(Float, nullable=False)
