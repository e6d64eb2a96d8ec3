"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def utcnow() -> datetime:
    return datetime.now(UTC)


class CreatedAtMixin:
    """Mixin to add a created_at timestamp column.

    The Python-side default keeps sub-second resolution on databases whose
    ``now()`` only has second precision, so insertion order stays sortable.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
