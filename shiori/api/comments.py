"""Comment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from shiori.api.dependencies import get_comment_service, get_session_identity
from shiori.errors import InvalidInput
from shiori.schemas.base import SuccessResponse
from shiori.schemas.comment import (
    CommentCreate,
    CommentNode,
    CommentRecord,
    CommentWithAuthor,
)
from shiori.services.authorization import SessionIdentity
from shiori.services.comments import CommentService
from shiori.services.validation import parse_id

router = APIRouter(prefix="/api/comments", tags=["comments"])


def _require_post_id(post_id: str | None) -> int:
    if not post_id:
        raise InvalidInput("Missing postId")
    parsed = parse_id(post_id)
    if parsed is None:
        raise InvalidInput("Invalid postId")
    return parsed


@router.get("", response_model=list[CommentWithAuthor])
def list_comments(
    service: Annotated[CommentService, Depends(get_comment_service)],
    post_id: str | None = Query(default=None, alias="postId"),
):
    """Get a post's comments as a flat list, oldest first."""
    return service.list_for_post(_require_post_id(post_id))


@router.get("/tree", response_model=list[CommentNode])
def comment_tree(
    service: Annotated[CommentService, Depends(get_comment_service)],
    post_id: str | None = Query(default=None, alias="postId"),
):
    """Get a post's comments as root comments with nested replies."""
    return service.thread_for_post(_require_post_id(post_id))


@router.post("", response_model=CommentRecord)
def create_comment(
    comment_data: CommentCreate,
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
    service: Annotated[CommentService, Depends(get_comment_service)],
):
    """Add a comment, or a reply when parentId is given."""
    return service.create_comment(
        identity,
        post_id=comment_data.post_id,
        content=comment_data.content,
        parent_id=comment_data.parent_id,
    )


@router.delete("", response_model=SuccessResponse)
def delete_comment(
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
    service: Annotated[CommentService, Depends(get_comment_service)],
    comment_id: str | None = Query(default=None, alias="id"),
):
    """Delete a comment (its author or an admin)."""
    service.delete_comment(identity, comment_id)
    return SuccessResponse(success=True)
