"""FastAPI dependencies for sessions, database and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from shiori.database import get_db
from shiori.errors import Unauthorized
from shiori.services.auth import decode_access_token
from shiori.services.authorization import SessionIdentity
from shiori.services.comments import CommentService
from shiori.services.drafts import DraftStore, get_redis
from shiori.services.posts import PostService

# Anonymous requests are allowed through; endpoints decide what needs a session
security = HTTPBearer(auto_error=False)


def get_session_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> SessionIdentity | None:
    """Get the caller's identity from the bearer token, or None without a valid session."""
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("email"):
        return None

    return SessionIdentity(
        email=payload["email"],
        name=payload.get("name"),
        image=payload.get("image"),
    )


def require_session(
    identity: Annotated[SessionIdentity | None, Depends(get_session_identity)],
) -> SessionIdentity:
    """Require a valid session."""
    if identity is None:
        raise Unauthorized()
    return identity


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db)


def get_comment_service(
    db: Annotated[Session, Depends(get_db)],
) -> CommentService:
    """Get comment service with dependencies."""
    return CommentService(db)


def get_draft_store() -> DraftStore:
    """Get draft store backed by the shared Redis client."""
    return DraftStore(get_redis())
