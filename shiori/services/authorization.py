"""Admin and ownership checks."""

from dataclasses import dataclass, replace

from sqlalchemy.orm import Session

from shiori.config import get_settings
from shiori.errors import Forbidden, Unauthorized
from shiori.models.comment import Comment
from shiori.models.enums import Role
from shiori.models.user import User
from shiori.services.auth import get_user_by_email


@dataclass(frozen=True)
class SessionIdentity:
    """Caller identity taken from a session token.

    ``role`` is only known once the identity is matched to a stored user.
    """

    email: str
    name: str | None = None
    image: str | None = None
    role: str | None = None

    def with_user(self, user: User | None) -> "SessionIdentity":
        """Merge stored profile fields over the token claims.

        The role always comes from the stored user, never from the token.
        """
        if user is None:
            return replace(self, role=None)
        return replace(
            self,
            name=user.name or self.name,
            image=user.image or self.image,
            role=user.role,
        )


def is_admin(email: str | None, admin_email: str | None, role: str | None) -> bool:
    """Either grant suffices: a stored admin role, or the configured owner email."""
    is_owner = bool(email) and bool(admin_email) and email == admin_email
    return Role.grants_admin(role) or is_owner


def identity_is_admin(identity: SessionIdentity) -> bool:
    return is_admin(identity.email, get_settings().admin_email, identity.role)


def require_admin(db: Session, identity: SessionIdentity | None) -> User | None:
    """Ensure the caller may manage posts.

    Returns the caller's stored user, which can be ``None`` for the owner
    email before it has ever signed in.
    """
    if identity is None:
        raise Unauthorized("Unauthorized: Please login first")

    user = get_user_by_email(db, identity.email)
    if not identity_is_admin(identity.with_user(user)):
        raise Forbidden("Forbidden: Admin only")
    return user


def can_delete_comment(identity: SessionIdentity, comment: Comment, user: User | None) -> bool:
    """Comment authors may always delete their own comments; admins may delete any."""
    if user is not None and comment.user_id == user.id:
        return True
    return identity_is_admin(identity.with_user(user))
