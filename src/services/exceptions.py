"""Shared exceptions for bookmark operations."""


class BookmarkValidationError(Exception):
    """
    Raised when a bookmark payload fails validation.

    The message is returned to the client verbatim in a 400 response.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkNotFoundError(Exception):
    """Raised when a bookmark ID does not exist."""

    message = "Bookmark doesn't exist"

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark {bookmark_id} doesn't exist")
