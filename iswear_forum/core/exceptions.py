"""Error kinds raised below the HTTP layer.

Handlers registered in `iswear_forum.main` are the only place these become
status codes. `detail` is a short machine-oriented message, never a page of
user-facing text.
"""

from fastapi import status


class ForumError(Exception):
    """Base class for every error kind the forum raises on purpose."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal Server Error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(ForumError):
    """Missing row or unknown id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(ForumError):
    """Duplicate username and similar uniqueness violations."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class UnauthorizedError(ForumError):
    """No session, an expired session, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class ForbiddenError(ForumError):
    """Authenticated, but the role or ownership check failed."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class ValidationError(ForumError):
    """Malformed input that passed schema parsing."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


__all__ = [
    "ForumError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
]
