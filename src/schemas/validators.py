"""
Validation of raw bookmark payloads.

Request bodies are taken as plain JSON objects and checked here rather than
by Pydantic field validation, because the checks must run in a fixed order
and each failure maps to one specific client-facing message.
"""
import logging
import math
from collections.abc import Mapping
from typing import Any

from core.sanitize import sanitize_text
from schemas.bookmark import UPDATABLE_FIELDS, BookmarkCreate, BookmarkUpdate
from services.exceptions import BookmarkValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "url", "rating")
ALLOWED_URL_PREFIXES = ("http://", "https://")
MIN_RATING = 1
MAX_RATING = 5

URL_SCHEME_MESSAGE = "Url should begin with http(s)://"
RATING_MESSAGE = f"rating must be a number between {MIN_RATING} and {MAX_RATING}"
UPDATE_FIELDS_MESSAGE = (
    "Request body must contain either 'title', 'url', 'description' or 'rating'"
)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def to_number(value: Any) -> float | None:
    """
    Convert a JSON number or numeric string to a float.

    Returns None for booleans, unparseable strings, NaN, infinities and other types.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_rating(value: Any) -> float:
    """
    Parse a rating and check it lies in [MIN_RATING, MAX_RATING].

    Zero, non-numeric and out-of-range values all fail with the same message.

    Raises:
        BookmarkValidationError: If the rating is not a number in range.
    """
    number = to_number(value)
    if number is None or not MIN_RATING <= number <= MAX_RATING:
        logger.error("Bookmark rating is required and must be a number between 1 and 5")
        raise BookmarkValidationError(RATING_MESSAGE)
    return number


def validate_url(url: Any) -> str:
    """Require an http:// or https:// URL."""
    if not isinstance(url, str) or not url.startswith(ALLOWED_URL_PREFIXES):
        logger.error("Bookmark url is required and must begin with http(s)://")
        raise BookmarkValidationError(URL_SCHEME_MESSAGE)
    return url


def validate_bookmark_create(payload: Mapping[str, Any] | None) -> BookmarkCreate:
    """
    Validate a create payload and return the sanitized record to persist.

    Checks run in order: required fields (title, url, rating), url scheme,
    then rating range. The first failure wins.

    Raises:
        BookmarkValidationError: With the message for the first failed check.
    """
    payload = payload or {}

    for field in REQUIRED_FIELDS:
        if _is_blank(payload.get(field)):
            logger.error("Bookmark %s is required", field)
            raise BookmarkValidationError(f"{field} is required")

    url = validate_url(payload["url"])
    rating = parse_rating(payload["rating"])
    description = payload.get("description")

    return BookmarkCreate(
        title=sanitize_text(_as_text(payload["title"])),
        url=url,
        description=sanitize_text(None if description is None else _as_text(description)),
        rating=rating,
    )


def validate_bookmark_update(payload: Mapping[str, Any] | None) -> BookmarkUpdate:
    """
    Validate a partial-update payload.

    Only `title`, `url`, `description` and `rating` are recognized; anything
    else is dropped. A recognized field counts as supplied when it is neither
    null nor an empty string. The url scheme and rating range are not
    re-checked here, but a rating must still be numeric to be stored.

    Raises:
        BookmarkValidationError: If no recognized field is supplied, or the
            supplied rating is not a number.
    """
    payload = payload or {}
    supplied = {
        field: payload[field]
        for field in UPDATABLE_FIELDS
        if field in payload and not _is_blank(payload[field])
    }
    if not supplied:
        logger.error("Invalid update without required fields")
        raise BookmarkValidationError(UPDATE_FIELDS_MESSAGE)

    for field in ("title", "description"):
        if field in supplied:
            supplied[field] = sanitize_text(_as_text(supplied[field]))
    if "url" in supplied:
        supplied["url"] = _as_text(supplied["url"])
    if "rating" in supplied:
        rating = to_number(supplied["rating"])
        if rating is None:
            logger.error("Bookmark rating must be a number")
            raise BookmarkValidationError(RATING_MESSAGE)
        supplied["rating"] = rating

    return BookmarkUpdate(**supplied)
