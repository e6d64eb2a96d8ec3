"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shiori.api.dependencies import require_session
from shiori.database import get_db
from shiori.errors import InvalidInput
from shiori.models.user import User
from shiori.schemas.auth import ProfileUpdate
from shiori.schemas.base import SuccessResponse
from shiori.services.authorization import SessionIdentity

router = APIRouter(prefix="/api/user", tags=["users"])


@router.post("/update", response_model=SuccessResponse)
def update_profile(
    profile: ProfileUpdate,
    identity: Annotated[SessionIdentity, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the caller's display name and avatar."""
    if not profile.name or not profile.name.strip():
        raise InvalidInput("Name is required")

    db.query(User).filter(User.email == identity.email).update(
        {"name": profile.name.strip(), "image": profile.image or identity.image},
        synchronize_session=False,
    )
    db.commit()
    return {"success": True}
