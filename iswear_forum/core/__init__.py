"""Core module exports."""

from .exceptions import (
    ForumError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
)
from .security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
    ALGORITHM,
)

__all__ = [
    "ForumError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "create_session_token",
    "decode_session_token",
    "get_password_hash",
    "verify_password",
    "ALGORITHM",
]
