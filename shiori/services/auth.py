"""Authentication service for JWT sessions, passwords and user provisioning."""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shiori.config import get_settings
from shiori.models.enums import Role
from shiori.models.user import User

if TYPE_CHECKING:
    from shiori.services.authorization import SessionIdentity

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

DEFAULT_DISPLAY_NAME = "Anonymous"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(
    email: str,
    name: str | None = None,
    image: str | None = None,
    user_id: str | None = None,
) -> str:
    """Create a session JWT carrying the caller's profile claims."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": user_id or email,
        "email": email,
        "name": name,
        "image": image,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Social sign-in accounts have no password and can never log in here.
    """
    user = get_user_by_email(db, email)
    if not user:
        logger.info("Login failed: unknown email")
        return None
    if not user.password_hash:
        logger.info(f"Login failed: user {user.id} has no password (social account)")
        return None
    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed: wrong password for user {user.id}")
        return None
    return user


def create_user(db: Session, email: str, password: str, name: str | None = None) -> User:
    """Create a credentials (email + password) user."""
    user = User(
        id=uuid.uuid4().hex,
        email=email,
        password_hash=get_password_hash(password),
        name=name,
        role=Role.READER.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_or_create_user(db: Session, identity: "SessionIdentity") -> User | None:
    """Return the stored user for a session identity, provisioning it if needed.

    The insert ignores an email conflict, so two first requests from the same
    identity both end up reading the single row. Returns ``None`` only when
    the row still cannot be read back.
    """
    user = get_user_by_email(db, identity.email)
    if user:
        return user

    values = {
        "id": uuid.uuid4().hex,
        "email": identity.email,
        "name": identity.name or DEFAULT_DISPLAY_NAME,
        "image": identity.image or "",
        "role": Role.READER.value,
        "password_hash": None,
        "created_at": datetime.now(UTC),
    }

    dialect = db.get_bind().dialect.name
    try:
        if dialect in ("postgresql", "sqlite"):
            insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = insert(User).values(**values).on_conflict_do_nothing(index_elements=["email"])
            db.execute(stmt)
        else:
            db.add(User(**values))
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("User provisioning raced with another request, re-reading")

    user = get_user_by_email(db, identity.email)
    if user is None:
        logger.error("User profile could not be established after provisioning")
    else:
        logger.info(f"Provisioned user {user.id} on first use")
    return user
