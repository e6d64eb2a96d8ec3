"""Pydantic schemas for API requests and responses."""

from shiori.schemas.auth import (
    AuthResponse,
    ProfileUpdate,
    RegisterResponse,
    SessionResponse,
    UserLogin,
    UserResponse,
)
from shiori.schemas.base import SuccessResponse
from shiori.schemas.comment import (
    CommentCreate,
    CommentNode,
    CommentRecord,
    CommentWithAuthor,
)
from shiori.schemas.draft import Draft
from shiori.schemas.post import (
    MessageResponse,
    PostCreate,
    PostDetail,
    PostPage,
    PostResponse,
    PostUpdate,
    SlugCheckResponse,
)

__all__ = [
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "RegisterResponse",
    "SessionResponse",
    "ProfileUpdate",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "PostDetail",
    "PostPage",
    "SlugCheckResponse",
    "MessageResponse",
    "CommentCreate",
    "CommentRecord",
    "CommentWithAuthor",
    "CommentNode",
    "SuccessResponse",
    "Draft",
]
