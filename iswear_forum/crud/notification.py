"""CRUD operations for `Notification` model."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.crud.base import CRUDBase
from iswear_forum.models.notification import Notification
from iswear_forum.services.notification_service import notification_service

logger = logging.getLogger(__name__)


class CRUDNotification(CRUDBase[Notification, dict, dict]):
    def get_by_user(
        self, db: Session, *, user_id: int, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        """Notifications for a user, newest first, optionally unread only."""
        stmt = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        stmt = stmt.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
        try:
            return list(db.scalars(stmt).all())
        except SQLAlchemyError:
            logger.exception(f"Failed to load notifications for user_id={user_id}")
            return []

    def create_notification(
        self,
        db: Session,
        *,
        user_id: int,
        from_user_id: int,
        thread_id: int,
        post_id: int,
        type: str = "mention",
        commit: bool = True,
    ) -> Notification:
        return self.create(
            db,
            obj_in={
                "user_id": user_id,
                "from_user_id": from_user_id,
                "thread_id": thread_id,
                "post_id": post_id,
                "type": type,
                "is_read": False,
            },
            commit=commit,
        )

    def create_mentions(
        self,
        db: Session,
        *,
        content: str,
        author_id: int,
        thread_id: int,
        post_id: int,
    ) -> List[Notification]:
        """Add a `mention` notification per mentioned user without committing.

        Called inside the transaction that creates the thread or post, so the
        post and its notifications are saved together or not at all.
        """
        recipients = notification_service.mention_recipients(db, content=content, author_id=author_id)
        created = [
            self.create_notification(
                db,
                user_id=user.id,
                from_user_id=author_id,
                thread_id=thread_id,
                post_id=post_id,
                commit=False,
            )
            for user in recipients
        ]
        if created:
            logger.info(f"Mention notifications queued: post_id={post_id}, recipients={[n.user_id for n in created]}")
        return created

    def mark_all_read(self, db: Session, *, user_id: int) -> int:
        """Mark all notifications for a user as read.

        Returns the number of notifications marked.
        """
        try:
            result = db.execute(
                update(Notification)
                .where(Notification.user_id == user_id, Notification.is_read.is_(False))
                .values(is_read=True)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount or 0


# Singleton instance
crud_notification = CRUDNotification(Notification)
