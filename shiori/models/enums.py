"""Enums for model fields."""

from enum import StrEnum


class Role(StrEnum):
    """Stored user roles."""

    READER = "reader"
    ADMIN = "admin"

    @classmethod
    def grants_admin(cls, role: str | None) -> bool:
        """Check if a stored role value grants admin actions."""
        return role == cls.ADMIN
