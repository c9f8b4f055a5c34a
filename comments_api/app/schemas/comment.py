"""
Pydantic schemas for comments.

``Comment`` is both the persisted record and the API response shape.
Request bodies come in two flavours: ``CommentCreate`` for new
comments and ``CommentPatch`` for the upsert route, which carries an
optional ``id``.  Request fields are optional at the schema level on
purpose: presence is checked by the comment service, which reports the
first missing field in a fixed order (email, body, name, postId).
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


PostId = Union[int, str]


class CommentBase(BaseModel):
    name: Optional[str] = Field(None, examples=["id labore ex et quam laborum"])
    email: Optional[str] = Field(None, examples=["Eliseo@gardner.biz"])
    body: Optional[str] = Field(None, examples=["laudantium enim quasi est quidem magnam"])
    postId: Optional[PostId] = Field(None, examples=[1])


class CommentCreate(CommentBase):
    """Schema for creating a comment.

    Unknown keys are accepted so that a payload holding only unknown
    keys is reported as missing ``email`` rather than as empty; they
    are never persisted.
    """

    model_config = ConfigDict(extra="allow")


class CommentPatch(CommentCreate):
    """Schema for the upsert route.

    When ``id`` matches a stored comment the remaining fields are
    merged into it; otherwise the payload is treated as a new comment.
    """

    id: Optional[Union[str, int]] = None


class Comment(CommentBase):
    """A stored comment."""

    id: Union[str, int]

    model_config = ConfigDict(extra="ignore", from_attributes=True)


class CommentCreated(BaseModel):
    """Confirmation returned after a comment has been created."""

    id: str
    message: str
