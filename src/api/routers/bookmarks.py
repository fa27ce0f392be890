"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_existing_bookmark, read_json_object
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse
from schemas.validators import validate_bookmark_create, validate_bookmark_update
from services import bookmark_service

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List every bookmark."""
    bookmarks = await bookmark_service.get_bookmarks(db)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    response: Response,
    payload: dict[str, Any] | None = Body(default=None),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    - **title**, **url** and **rating** are required
    - **url** must begin with http:// or https://
    - **rating** must be a number between 1 and 5
    """
    data = validate_bookmark_create(payload)
    bookmark = await bookmark_service.insert_bookmark(db, data)
    response.headers["Location"] = f"/bookmarks/{bookmark.id}"
    return BookmarkResponse.model_validate(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    request: Request,
    bookmark: Bookmark = Depends(get_existing_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Update only the supplied fields of a bookmark."""
    payload = await read_json_object(request)
    data = validate_bookmark_update(payload)
    await bookmark_service.update_bookmark(db, bookmark.id, data)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(db, bookmark.id)
