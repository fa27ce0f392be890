"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate

logger = logging.getLogger(__name__)


async def get_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Get all bookmarks, oldest first."""
    result = await db.execute(select(Bookmark).order_by(Bookmark.id))
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Get a bookmark by ID. Returns None if not found."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def insert_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """
    Insert a new bookmark and return the persisted row, including its generated ID.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(**data.model_dump())
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("Bookmark with id %s created", bookmark.id)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> int:
    """
    Apply the explicitly set fields of `data` to a bookmark.

    Returns the number of rows updated (0 if the ID does not exist).

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    values = data.model_dump(exclude_unset=True)
    if not values:
        return 0
    result = await db.execute(
        update(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .values(**values)
        .execution_options(synchronize_session="fetch"),
    )
    return result.rowcount


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> int:
    """
    Delete a bookmark. Returns the number of rows deleted (0 if not found).

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    result = await db.execute(
        delete(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .execution_options(synchronize_session="fetch"),
    )
    if result.rowcount:
        logger.info("Bookmark with id %s deleted", bookmark_id)
    return result.rowcount
