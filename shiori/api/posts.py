"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from shiori.api.dependencies import get_post_service, get_session_identity
from shiori.config import get_settings
from shiori.schemas.post import MessageResponse, PostCreate, PostDetail, PostPage, PostUpdate
from shiori.services.authorization import SessionIdentity
from shiori.services.posts import PostService

router = APIRouter(prefix="/api/posts", tags=["posts"])

settings = get_settings()


@router.get("", response_model=PostPage)
def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
    search: str = Query(default="", description="Text to find in title, excerpt or content"),
    category: str = Query(default="", description="Exact category"),
    page: int = Query(default=1),
    limit: int = Query(default=settings.posts_per_page),
):
    """List posts newest first with search, category filter and pagination."""
    return service.list_posts(search=search, category=category, page=page, limit=limit)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Create a post (admin only)."""
    service.create_post(identity, post_data)
    return MessageResponse(message="Success")


@router.get("/{slug_or_id}", response_model=PostDetail)
def get_post(
    slug_or_id: str,
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Get a post by slug or numeric id."""
    return service.get_post(slug_or_id)


@router.patch("/{slug_or_id}", response_model=MessageResponse)
def update_post(
    slug_or_id: str,
    post_data: PostUpdate,
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Update a post (admin only)."""
    service.update_post(identity, slug_or_id, post_data)
    return MessageResponse(message="Updated successfully")


@router.delete("/{slug_or_id}", response_model=MessageResponse)
def delete_post(
    slug_or_id: str,
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
):
    """Delete a post and its comments (admin only)."""
    service.delete_post(identity, slug_or_id)
    return MessageResponse(message="Deleted successfully")
