"""Input validation for registration, comments and request ids.

Validators return a ``ValidationResult`` instead of raising so callers can
decide which error to surface.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 8
MIN_COMMENT_LENGTH = 2
MAX_COMMENT_LENGTH = 1000

# Integer primary keys are signed 64-bit in every supported database
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)


class ValidationFailure(StrEnum):
    """Reasons a validator can reject input."""

    MISSING_FIELDS = "missing_fields"
    INVALID_EMAIL = "invalid_email"
    WEAK_PASSWORD = "weak_password"
    EMPTY_CONTENT = "empty_content"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str | None = None
    reason: ValidationFailure | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, reason: ValidationFailure, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message, reason=reason)


def validate_email(email: str) -> bool:
    """Check that an email looks like ``local@domain.tld``."""
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_password(password: str) -> ValidationResult:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return ValidationResult.fail(
            ValidationFailure.WEAK_PASSWORD,
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    return ValidationResult.ok()


def validate_registration(name: str, email: str, password: str) -> ValidationResult:
    """Validate a registration form: completeness, then email, then password."""
    if not name or not email or not password:
        return ValidationResult.fail(
            ValidationFailure.MISSING_FIELDS, "Please fill in all required fields"
        )

    if not validate_email(email):
        return ValidationResult.fail(ValidationFailure.INVALID_EMAIL, "Invalid email format")

    return validate_password(password)


def validate_comment_content(content: str | None) -> ValidationResult:
    """Validate comment text after trimming surrounding whitespace."""
    trimmed = (content or "").strip()
    if not trimmed:
        return ValidationResult.fail(
            ValidationFailure.EMPTY_CONTENT, "Please write something before sending"
        )
    if len(trimmed) < MIN_COMMENT_LENGTH:
        return ValidationResult.fail(
            ValidationFailure.TOO_SHORT, "Comment is a little short, try writing a bit more"
        )
    if len(trimmed) > MAX_COMMENT_LENGTH:
        return ValidationResult.fail(
            ValidationFailure.TOO_LONG,
            f"Comment is too long (limit {MAX_COMMENT_LENGTH:,} characters)",
        )
    return ValidationResult.ok()


def parse_id(value: int | str | None) -> int | None:
    """Parse an identifier sent as a number or numeric string.

    Returns ``None`` for anything that is not a whole number or that falls
    outside the range a database key can hold.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
    if not MIN_ID <= parsed <= MAX_ID:
        return None
    return parsed
