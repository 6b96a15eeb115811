"""CRUD operations for `User` model."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.core.exceptions import ConflictError, NotFoundError
from iswear_forum.core.security import verify_password
from iswear_forum.crud.base import CRUDBase, coerce_id, contains_pattern
from iswear_forum.models.user import User, UserRole, UserStatus
from iswear_forum.schemas.user import AdminUserUpdate, SafeUser, UserProfileUpdate
from iswear_forum.services.views import safe_user

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, BaseModel, UserProfileUpdate]):
    def get_by_username(self, db: Session, username: Optional[str]) -> Optional[User]:
        if not username:
            return None
        return self.get_by_field(db, "username", username)

    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        return self.get_by_field(db, "email", email)

    def create_user(self, db: Session, *, fields: Dict[str, Any]) -> User:
        """Insert a user whose `password_hash` is already computed.

        Raises:
            ConflictError: If the username is already taken
        """
        user_data = dict(fields)
        if self.get_by_username(db, user_data.get("username")):
            raise ConflictError("username_taken")

        user_data.setdefault("role", UserRole.MEMBER.value)
        user_data.setdefault("status", UserStatus.PENDING.value)
        db_obj = User(**user_data)
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("username_taken") from e
        except Exception:
            db.rollback()
            raise
        return db_obj

    def update_user(
        self,
        db: Session,
        *,
        user_id: Any,
        obj_in: Union[UserProfileUpdate, AdminUserUpdate, Dict[str, Any]],
    ) -> User:
        """Apply a partial update.

        Raises:
            NotFoundError: If no user has this id
        """
        user = self.get(db, user_id)
        if not user:
            raise NotFoundError("user_not_found")

        update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
        # Enum members are stored by value
        for field in ("role", "status"):
            if isinstance(update_data.get(field), (UserRole, UserStatus)):
                update_data[field] = update_data[field].value
        update_data.pop("password_hash", None)
        update_data.pop("id", None)
        return self.update(db, db_obj=user, obj_in=update_data)

    def authenticate(self, db: Session, *, username: str, password: str) -> Optional[User]:
        user = self.get_by_username(db, username)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def list_users(self, db: Session) -> List[SafeUser]:
        """All users, oldest account first, without password hashes."""
        stmt = select(User).order_by(User.id)
        try:
            return [safe_user(user) for user in db.scalars(stmt).all()]
        except SQLAlchemyError:
            logger.exception("Failed to list users")
            return []

    def count_online(self, db: Session, *, window_seconds: int) -> int:
        """Users whose last request falls inside the window."""
        cutoff = datetime.utcnow() - timedelta(seconds=window_seconds)
        stmt = select(func.count(User.id)).where(User.last_seen >= cutoff)
        return db.scalar(stmt) or 0

    def touch_last_seen(self, db: Session, *, user_id: int) -> None:
        """Record activity. Presence is best-effort and never fails the request."""
        try:
            db.execute(
                update(User).where(User.id == user_id).values(last_seen=datetime.utcnow())
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Failed to update last_seen for user_id={user_id}: {e}")

    def increment_views(self, db: Session, *, user_id: Any) -> None:
        pk = coerce_id(user_id)
        if pk is None:
            return
        try:
            db.execute(update(User).where(User.id == pk).values(views=User.views + 1))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Failed to increment profile views for user_id={pk}: {e}")

    def search(self, db: Session, *, query: str, limit: int = 20) -> List[SafeUser]:
        """Case-insensitive username match."""
        stmt = (
            select(User)
            .where(User.username.ilike(contains_pattern(query), escape="\\"))
            .order_by(User.username)
            .limit(limit)
        )
        try:
            return [safe_user(user) for user in db.scalars(stmt).all()]
        except SQLAlchemyError:
            logger.exception("User search failed")
            return []


# Singleton instance
crud_user = CRUDUser(User)
