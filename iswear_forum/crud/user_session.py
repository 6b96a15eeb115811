"""CRUD operations for server-side login sessions."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.core.security import new_session_id
from iswear_forum.crud.base import CRUDBase
from iswear_forum.models.user_session import UserSession

logger = logging.getLogger(__name__)


class CRUDUserSession(CRUDBase[UserSession, dict, dict]):
    def create_session(self, db: Session, *, user_id: int, max_age_days: int) -> UserSession:
        """Open a session, dropping the user's expired ones in the same commit."""
        now = datetime.utcnow()
        try:
            db.execute(
                delete(UserSession).where(UserSession.user_id == user_id, UserSession.expires_at <= now)
            )
            session = self.create(
                db,
                obj_in={"id": new_session_id(), "user_id": user_id, "expires_at": now + timedelta(days=max_age_days)},
                commit=False,
            )
            db.commit()
            db.refresh(session)
        except Exception:
            db.rollback()
            raise
        return session

    def get_active(self, db: Session, session_id: Optional[str]) -> Optional[UserSession]:
        """Session row if it exists and has not expired."""
        if not session_id:
            return None
        try:
            session = db.get(UserSession, session_id)
        except SQLAlchemyError:
            logger.exception("Failed to load session")
            return None
        if session is None or session.expires_at <= datetime.utcnow():
            return None
        return session

    def delete_session(self, db: Session, session_id: Optional[str]) -> bool:
        """Remove a session. Returns False when there was nothing to remove."""
        if not session_id:
            return False
        try:
            result = db.execute(delete(UserSession).where(UserSession.id == session_id))
            db.commit()
        except Exception:
            db.rollback()
            raise
        return bool(result.rowcount)

    def purge_expired(self, db: Session) -> int:
        try:
            result = db.execute(delete(UserSession).where(UserSession.expires_at <= datetime.utcnow()))
            db.commit()
        except Exception:
            db.rollback()
            raise
        if result.rowcount:
            logger.info(f"Purged {result.rowcount} expired sessions")
        return result.rowcount or 0


# Singleton instance
crud_user_session = CRUDUserSession(UserSession)
