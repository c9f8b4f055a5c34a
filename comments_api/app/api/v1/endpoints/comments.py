"""
Comment endpoints for API v1.

These routes map HTTP verbs onto the five comment store operations and
translate store errors into status codes:

* validation errors → 400
* duplicates → 422
* unknown ids → 404
* storage failures → 500
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from comments_api.app.core.exceptions import (
    CommentConflictError,
    CommentNotFoundError,
    CommentValidationError,
    StorageError,
)
from comments_api.app.schemas.comment import Comment, CommentCreate, CommentCreated, CommentPatch
from comments_api.app.services.comment_service import CommentService


logger = logging.getLogger(__name__)

router = APIRouter()


def get_comment_service(request: Request) -> CommentService:
    service = getattr(request.app.state, "comment_service", None)
    if service is None:
        logger.error("Comment service not initialized.")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Comment service unavailable")
    return service


@router.get("", response_model=List[Comment])
async def list_comments(service: CommentService = Depends(get_comment_service)) -> List[Comment]:
    """Return all comments in the order they were created."""
    try:
        return await service.list_comments()
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e


@router.get("/{comment_id}", response_model=Comment)
async def get_comment(
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
) -> Comment:
    """Retrieve a single comment by its id.  Returns 404 if it does not exist."""
    try:
        return await service.get_comment(comment_id)
    except CommentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e


@router.post("", response_model=CommentCreated, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_in: Optional[CommentCreate] = Body(None),
    service: CommentService = Depends(get_comment_service),
) -> CommentCreated:
    """Create a new comment.

    All of ``email``, ``body``, ``name`` and ``postId`` are required.  A
    comment with the same email, body, name and postId as an existing
    one (ignoring letter case) is rejected with 422.
    """
    try:
        comment_id = await service.create_comment(comment_in or CommentCreate())
    except CommentValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CommentConflictError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message) from e
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error. Comment has not been created",
        ) from e
    return CommentCreated(id=comment_id, message=f"Comment id:{comment_id} has been added!")


@router.patch("", response_model=Comment)
async def upsert_comment(
    response: Response,
    comment_in: Optional[CommentPatch] = Body(None),
    service: CommentService = Depends(get_comment_service),
) -> Comment:
    """Update a comment by ``id`` or create it when the id is unknown.

    Responds with 200 after an update and 201 after a create.  Only the
    fields present in the body are changed on update.
    """
    try:
        comment, created = await service.upsert_comment(comment_in or CommentPatch())
    except CommentValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CommentConflictError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message) from e
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return comment


@router.delete("/{comment_id}", response_model=Comment)
async def delete_comment(
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
) -> Comment:
    """Delete a comment and return it.  Returns 404 if it does not exist."""
    try:
        return await service.delete_comment(comment_id)
    except CommentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e
