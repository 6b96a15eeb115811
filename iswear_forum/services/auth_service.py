"""Registration, login and session resolution."""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from iswear_forum.config import settings
from iswear_forum.core.exceptions import ConflictError, UnauthorizedError
from iswear_forum.core.permissions import is_approved
from iswear_forum.core.security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    get_token_session_id,
)
from iswear_forum.crud.base import coerce_id
from iswear_forum.crud.user import crud_user
from iswear_forum.crud.user_session import crud_user_session
from iswear_forum.models.user import User, UserRole, UserStatus
from iswear_forum.schemas.user import RegisterRequest

logger = logging.getLogger(__name__)

AUTHENTICATED = "AUTHENTICATED"
PENDING_APPROVAL = "PENDING_APPROVAL"


class AuthService:
    """Session lifecycle: ANONYMOUS -> AUTHENTICATED -> ANONYMOUS.

    A user whose account is not yet approved still holds a valid session; the
    UI is told through `session_state` and shows a holding screen.
    """

    def open_session(self, db: Session, user: User) -> str:
        """Persist a session row and return the signed cookie value for it."""
        session = crud_user_session.create_session(
            db, user_id=user.id, max_age_days=settings.SESSION_MAX_AGE_DAYS
        )
        return create_session_token(user.id, session.id, session.expires_at)

    def register(self, db: Session, payload: RegisterRequest) -> Tuple[User, str]:
        """Create a pending member and log them in.

        Raises:
            ConflictError: If the username is already taken
        """
        if crud_user.get_by_username(db, payload.username):
            logger.info(f"[AUTH] Registration rejected, username taken: {payload.username}")
            raise ConflictError("username_taken")

        user = crud_user.create_user(
            db,
            fields={
                "username": payload.username,
                "email": payload.email,
                "icq": payload.icq,
                "application_reason": payload.application_reason,
                "password_hash": get_password_hash(payload.password),
                "role": UserRole.MEMBER.value,
                "status": UserStatus.PENDING.value,
            },
        )
        logger.info(f"[AUTH] User registered: id={user.id}, username={user.username}")
        return user, self.open_session(db, user)

    def login(
        self,
        db: Session,
        username: str,
        password: str,
        previous_token: Optional[str] = None,
    ) -> Tuple[User, str]:
        """
        The session behind `previous_token`, if any, is closed once the new
        credentials check out, so a browser holds one session at a time.

        Raises:
            UnauthorizedError: If the username is unknown or the password is wrong
        """
        user = crud_user.authenticate(db, username=username, password=password)
        if not user:
            logger.info(f"[AUTH] Login failed for username={username}")
            raise UnauthorizedError("invalid_credentials")
        self.logout(db, previous_token)
        logger.info(f"[AUTH] Login succeeded: id={user.id}")
        return user, self.open_session(db, user)

    def logout(self, db: Session, token: Optional[str]) -> None:
        """End the session behind `token`. Unknown or missing tokens are a no-op."""
        session_id = get_token_session_id(token)
        if session_id and crud_user_session.delete_session(db, session_id):
            logger.info("[AUTH] Session closed")

    def get_current_user(self, db: Session, token: Optional[str]) -> User:
        """
        Resolve token -> live session -> user.

        Raises:
            UnauthorizedError: If any link in that chain is missing
        """
        if not token:
            raise UnauthorizedError("not_authenticated")

        claims = decode_session_token(token)
        session = crud_user_session.get_active(db, claims.get("sid"))
        if session is None or coerce_id(claims.get("sub")) != session.user_id:
            raise UnauthorizedError("invalid_session")

        user = crud_user.get(db, session.user_id)
        if user is None:
            logger.info(f"[AUTH] Session {session.id[:8]} points at a missing user")
            raise UnauthorizedError("invalid_session")
        return user

    @staticmethod
    def session_state(user: User) -> str:
        return AUTHENTICATED if is_approved(user) else PENDING_APPROVAL


# Singleton instance
auth_service = AuthService()
