"""FastAPI dependencies for injection."""
import json
from typing import Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.bookmark import Bookmark
from services import bookmark_service
from services.exceptions import BookmarkNotFoundError, BookmarkValidationError

# Bookmark IDs are a PostgreSQL integer (int4) serial.
MAX_BOOKMARK_ID = 2_147_483_647


async def get_existing_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """Load the bookmark named in the path, or fail with 404 before the handler runs."""
    if not 1 <= bookmark_id <= MAX_BOOKMARK_ID:
        raise BookmarkNotFoundError(bookmark_id)
    bookmark = await bookmark_service.get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


async def read_json_object(request: Request) -> dict[str, Any] | None:
    """
    Parse the request body as a JSON object.

    Called from the handler rather than declared as a Body parameter, so the
    body is only looked at once path dependencies (the 404 lookup) have passed.

    Returns:
        The decoded object, or None when the body is empty.

    Raises:
        BookmarkValidationError: If the body is not valid JSON or not an object.
    """
    body = await request.body()
    if not body.strip():
        return None
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise BookmarkValidationError("Request body must be valid JSON") from e
    if not isinstance(payload, dict):
        raise BookmarkValidationError("Request body must be a JSON object")
    return payload


__all__ = [
    "get_async_session",
    "get_existing_bookmark",
    "read_json_object",
]
