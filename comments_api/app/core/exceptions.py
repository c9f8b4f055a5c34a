"""
Errors raised by the comment store and its persistence backend.

Every error carries a human readable ``message`` that the API layer
passes through to clients unchanged.  The endpoints map each class to
an HTTP status code; the store itself never recovers from any of them.
"""

from typing import Any, Optional


class CommentServiceError(Exception):
    """Base class for all comment store errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CommentValidationError(CommentServiceError):
    """The payload is empty or a required field is missing.

    ``reason`` is ``"empty"`` for an empty payload and ``"missing"``
    when ``field`` names the first absent field.
    """

    def __init__(self, reason: str, field: Optional[str] = None) -> None:
        if reason == "empty":
            message = "Comment is absent or empty"
        else:
            message = f"Field {field} is absent"
        super().__init__(message)
        self.reason = reason
        self.field = field


class CommentConflictError(CommentServiceError):
    """A comment with the same email, body, name and postId exists."""

    def __init__(self, message: str = "Comment with the same fields already exists") -> None:
        super().__init__(message)


class CommentNotFoundError(CommentServiceError):
    """No comment has the requested identifier."""

    def __init__(self, comment_id: Any) -> None:
        super().__init__(f"Comment with id {comment_id} is not found")
        self.comment_id = comment_id


class StorageError(CommentServiceError):
    """The comment collection could not be read or written."""
