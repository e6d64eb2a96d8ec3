"""HTTP error types raised by services and dependencies.

Every error renders as ``{"error": <detail>}`` through the handlers
registered in ``shiori.main``.
"""

from fastapi import HTTPException, status


class Unauthorized(HTTPException):
    """No session was presented."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    """A session exists but lacks the required role or ownership."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidInput(HTTPException):
    """Malformed payload or a payload that failed validation."""

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidRelationship(InvalidInput):
    """Parent comment belongs to a different post."""

    def __init__(self, detail: str = "Invalid parent-post relationship"):
        super().__init__(detail)


class NestingLimitExceeded(InvalidInput):
    """Reply targets a comment that is itself a reply."""

    def __init__(self, detail: str = "Replies are limited to two levels"):
        super().__init__(detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ProfileError(HTTPException):
    """The acting user's record could not be established."""

    def __init__(self, detail: str = "User profile could not be established"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class ServiceUnavailable(HTTPException):
    def __init__(self, detail: str = "Service unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
