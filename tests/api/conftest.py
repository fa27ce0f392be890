"""Shared fixtures for API tests."""
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark


def make_bookmarks_array() -> list[dict[str, Any]]:
    """Three well-formed bookmarks."""
    return [
        {
            "title": "Google",
            "url": "https://www.google.com",
            "description": "",
            "rating": 5,
        },
        {
            "title": "Youtube",
            "url": "https://www.youtube.com",
            "description": "",
            "rating": 5,
        },
        {
            "title": "Desiring God",
            "url": "https://www.desiringgod.org",
            "description": "",
            "rating": 5,
        },
    ]


def create_bookmark_payload() -> dict[str, Any]:
    """A valid create payload."""
    return {
        "title": "Google",
        "url": "https://www.google.com",
        "description": "",
        "rating": 5,
    }


MALICIOUS_BOOKMARK = {
    "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
    "url": "https://www.hackers.com",
    "description": (
        'Bad image <img src="https://url.to.file.which/does-not.exist" '
        'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
    ),
    "rating": 1,
}

EXPECTED_SANITIZED_TITLE = (
    'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;'
)
EXPECTED_SANITIZED_DESCRIPTION = (
    'Bad image <img src="https://url.to.file.which/does-not.exist">. '
    "But not <strong>all</strong> bad."
)

NOT_FOUND_BODY = {"error": {"message": "Bookmark doesn't exist"}}


def as_response(bookmark: Bookmark) -> dict[str, Any]:
    """The JSON a well-formed stored bookmark is expected to serialize to."""
    return {
        "id": bookmark.id,
        "title": bookmark.title,
        "url": bookmark.url,
        "description": bookmark.description,
        "rating": bookmark.rating,
    }


@pytest.fixture
async def test_bookmarks(db_session: AsyncSession) -> list[Bookmark]:
    """Insert the standard bookmarks directly and return them with their IDs."""
    bookmarks = [Bookmark(**fields) for fields in make_bookmarks_array()]
    db_session.add_all(bookmarks)
    await db_session.flush()
    return bookmarks


@pytest.fixture
async def malicious_bookmark(db_session: AsyncSession) -> Bookmark:
    """Insert an unsanitized bookmark directly, bypassing the API's write path."""
    bookmark = Bookmark(**MALICIOUS_BOOKMARK)
    db_session.add(bookmark)
    await db_session.flush()
    return bookmark
