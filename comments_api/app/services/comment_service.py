"""
Service layer for comments.

``CommentService`` owns the comment collection for the duration of a
single operation.  Every operation reads the whole collection from the
storage backend, computes its result and, when it changes something,
writes the whole collection back.  Nothing is cached between calls.

Two rules are enforced on top of plain CRUD:

* New comments must carry non-empty ``email``, ``body``, ``name`` and
  ``postId`` values.  The first missing field (in that order) is
  reported.
* A new comment is rejected when a stored comment has the same email
  and the same body, name and postId, all compared case-insensitively.

Updating an existing comment through ``upsert_comment`` performs no
validation; only the create paths validate.

Mutating operations hold a per-service ``asyncio.Lock`` across the
whole load, compute and save sequence, so concurrent requests served by
one process cannot overwrite each other's changes.  Several processes
sharing one file are not coordinated.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, Iterable, List, Tuple

from fastapi.concurrency import run_in_threadpool

from comments_api.app.core.exceptions import (
    CommentConflictError,
    CommentNotFoundError,
    CommentValidationError,
)
from comments_api.app.core.storage import JsonFileStorage
from comments_api.app.schemas.comment import Comment, CommentCreate, CommentPatch


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("email", "body", "name", "postId")
COMMENT_FIELDS = ("name", "email", "body", "postId")


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _same(target: Any, compare: Any) -> bool:
    if target is None or compare is None:
        return target is compare
    return str(target).lower() == str(compare).lower()


def validate_comment(payload: Dict[str, Any]) -> None:
    """Raise ``CommentValidationError`` if ``payload`` cannot become a comment."""
    if not payload:
        raise CommentValidationError("empty")
    for field in REQUIRED_FIELDS:
        if _is_empty(payload.get(field)):
            raise CommentValidationError("missing", field)


def check_comment_unique(payload: Dict[str, Any], comments: Iterable[Comment]) -> bool:
    """Return ``False`` if ``payload`` duplicates a stored comment.

    Only the first comment with a matching email is compared.
    """
    by_email = next((c for c in comments if _same(payload.get("email"), c.email)), None)
    if by_email is None:
        return True
    return not (
        _same(payload.get("body"), by_email.body)
        and _same(payload.get("name"), by_email.name)
        and _same(payload.get("postId"), by_email.postId)
    )


def generate_comment_id(comments: Iterable[Comment]) -> str:
    existing = {str(c.id) for c in comments}
    while True:
        comment_id = str(uuid.uuid4())
        if comment_id not in existing:
            return comment_id


class CommentService:
    """Comment store operating on a whole-collection storage backend."""

    def __init__(self, storage: JsonFileStorage) -> None:
        self.storage = storage
        self._lock = asyncio.Lock()

    async def _load(self) -> List[Comment]:
        return await run_in_threadpool(self.storage.load)

    async def _save(self, comments: List[Comment]) -> None:
        await run_in_threadpool(self.storage.save, comments)

    async def list_comments(self) -> List[Comment]:
        """Return every stored comment in insertion order."""
        return await self._load()

    async def get_comment(self, comment_id: str) -> Comment:
        """Return the comment whose id equals ``comment_id`` exactly."""
        comments = await self._load()
        for comment in comments:
            if str(comment.id) == comment_id:
                return comment
        logger.warning("Comment %s not found", comment_id)
        raise CommentNotFoundError(comment_id)

    @staticmethod
    def _validate(payload: Dict[str, Any]) -> None:
        try:
            validate_comment(payload)
        except CommentValidationError as exc:
            logger.warning("Rejected comment: %s", exc.message)
            raise

    @staticmethod
    def _build_new_comment(payload: Dict[str, Any], comments: List[Comment]) -> Comment:
        """Return the record for a validated ``payload`` unless it is a duplicate."""
        if not check_comment_unique(payload, comments):
            logger.warning("Rejected duplicate comment from %s", payload.get("email"))
            raise CommentConflictError()
        fields = {field: payload[field] for field in COMMENT_FIELDS}
        return Comment(id=generate_comment_id(comments), **fields)

    async def create_comment(self, data: CommentCreate) -> str:
        """Validate, append and persist a new comment; return its id."""
        payload = data.model_dump(exclude_unset=True)
        self._validate(payload)

        async with self._lock:
            comments = await self._load()
            comment = self._build_new_comment(payload, comments)
            comments.append(comment)
            await self._save(comments)

        logger.info("Created comment %s", comment.id)
        return str(comment.id)

    async def upsert_comment(self, data: CommentPatch) -> Tuple[Comment, bool]:
        """Update the comment matching ``data.id`` or create a new one.

        Returns the resulting comment and ``True`` when it was created.
        A supplied id that matches nothing is ignored and a fresh id is
        assigned.
        """
        payload = data.model_dump(exclude_unset=True)
        comment_id = payload.get("id")

        async with self._lock:
            comments = await self._load()
            index = None
            if comment_id is not None:
                index = next(
                    (i for i, c in enumerate(comments) if c.id == comment_id), None
                )

            if index is not None:
                updates = {k: v for k, v in payload.items() if k in COMMENT_FIELDS}
                comment = comments[index].model_copy(update=updates)
                comments[index] = comment
                await self._save(comments)
                logger.info("Updated comment %s", comment.id)
                return comment, False

            self._validate(payload)
            comment = self._build_new_comment(payload, comments)
            comments.append(comment)
            await self._save(comments)

        logger.info("Created comment %s via upsert", comment.id)
        return comment, True

    async def delete_comment(self, comment_id: str) -> Comment:
        """Remove the comment whose id equals ``comment_id`` and return it."""
        async with self._lock:
            comments = await self._load()
            matches: List[Comment] = []
            rest: List[Comment] = []
            for comment in comments:
                if str(comment.id) == comment_id:
                    matches.append(comment)
                else:
                    rest.append(comment)

            if not matches:
                logger.warning("Comment %s not found", comment_id)
                raise CommentNotFoundError(comment_id)

            await self._save(rest)

        logger.info("Deleted comment %s", comment_id)
        return matches[0]
