"""Security utilities for password hashing and session tokens."""

import logging
import secrets
from datetime import datetime
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.crypto.scrypt import scrypt
from passlib.utils import consteq

from iswear_forum.config import settings
from iswear_forum.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# scrypt cost parameters (N, r, p) and derived key length
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEYLEN = 64
SALT_BYTES = 16

# Session token settings
ALGORITHM = "HS256"


def _derive_key(password: str, salt: str) -> bytes:
    return scrypt(
        password.encode("utf-8"),
        salt.encode("utf-8"),
        SCRYPT_N,
        SCRYPT_R,
        SCRYPT_P,
        SCRYPT_KEYLEN,
    )


def get_password_hash(password: str) -> str:
    """Hash a password with scrypt and a fresh random salt.

    The stored form is ``<hex digest>.<hex salt>``.
    """
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive_key(password, salt).hex()}.{salt}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a stored ``<hex digest>.<hex salt>`` value.

    Malformed stored values never verify.
    """
    if not plain_password or not hashed_password:
        return False
    digest_hex, sep, salt = hashed_password.partition(".")
    if not sep or not salt:
        return False
    try:
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False
    if len(expected) != SCRYPT_KEYLEN:
        return False
    return consteq(expected, _derive_key(plain_password, salt))


def new_session_id() -> str:
    """Random opaque id for a server-side session row."""
    return secrets.token_hex(32)


def create_session_token(user_id: int, session_id: str, expires_at: datetime) -> str:
    """Sign the cookie value that points at a session row.

    Args:
        user_id: Owner of the session
        session_id: Primary key of the `user_sessions` row
        expires_at: Expiry, mirrored from the session row

    Returns:
        Encoded token

    Raises:
        ValueError: If SECRET_KEY is not configured
    """
    if not settings.SECRET_KEY:
        raise ValueError("SECRET_KEY environment variable is not set")

    to_encode = {"sub": str(user_id), "sid": session_id, "exp": expires_at}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Dict[str, Any]:
    """Decode and verify a session token.

    Raises:
        UnauthorizedError: If the token is malformed, tampered with or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"[AUTH] Session token rejected: {type(e).__name__}")
        raise UnauthorizedError("invalid_session") from e


def get_token_session_id(token: Optional[str]) -> Optional[str]:
    """Extract the session id from a token, or None if it does not verify."""
    if not token:
        return None
    try:
        return decode_session_token(token).get("sid")
    except UnauthorizedError:
        return None
