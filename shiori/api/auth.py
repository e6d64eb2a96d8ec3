"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shiori.api.dependencies import require_session
from shiori.database import get_db
from shiori.errors import ProfileError, Unauthorized
from shiori.schemas.auth import (
    AuthResponse,
    RegisterResponse,
    SessionResponse,
    UserLogin,
    UserResponse,
)
from shiori.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_or_create_user,
    get_user_by_email,
)
from shiori.services.authorization import SessionIdentity, identity_is_admin
from shiori.services.validation import validate_registration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _register_failure(message: str | None) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=RegisterResponse(success=False, message=message or "Invalid input").model_dump(),
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    db: Annotated[Session, Depends(get_db)],
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Register a credentials account from form fields."""
    validation = validate_registration(name, email, password)
    if not validation.is_valid:
        return _register_failure(validation.message)

    if get_user_by_email(db, email):
        return _register_failure("Email is already registered")

    try:
        user = create_user(db, email, password, name)
    except IntegrityError:
        db.rollback()
        logger.info("Duplicate email rejected on registration insert")
        return _register_failure("Email is already registered")
    logger.info(f"Registered user {user.id}")
    return RegisterResponse(success=True, message="Registration successful")


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise Unauthorized("Incorrect email or password")

    access_token = create_access_token(user.email, user.name, user.image, user_id=user.id)
    return AuthResponse(access_token=access_token, user=UserResponse.model_validate(user))


@router.get("/session", response_model=SessionResponse)
def get_session(
    identity: Annotated[SessionIdentity, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the current session merged with the stored profile.

    The first call for a social sign-in identity provisions its user record.
    """
    user = get_or_create_user(db, identity)
    if user is None:
        raise ProfileError()

    merged = identity.with_user(user)
    return SessionResponse(
        email=merged.email,
        name=merged.name,
        image=merged.image,
        role=user.role,
        is_admin=identity_is_admin(merged),
    )
