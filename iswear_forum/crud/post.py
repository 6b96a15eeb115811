"""CRUD operations for Post."""

import logging
from typing import Any, Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from iswear_forum.core.exceptions import NotFoundError
from iswear_forum.crud.base import CRUDBase
from iswear_forum.crud.notification import crud_notification
from iswear_forum.models.notification import Notification
from iswear_forum.models.post import Post
from iswear_forum.models.thread import Thread
from iswear_forum.schemas.forum import PostCreate

logger = logging.getLogger(__name__)


class CRUDPost(CRUDBase[Post, PostCreate, dict]):
    """CRUD operations for Post."""

    def create_post(
        self,
        db: Session,
        *,
        author_id: int,
        thread_id: int,
        content: str,
        file_url: Optional[str] = None,
    ) -> Post:
        """Create a reply in an existing thread, with its mention notifications.

        Raises:
            NotFoundError: If the thread does not exist
        """
        if db.get(Thread, thread_id) is None:
            raise NotFoundError("thread_not_found")

        post = Post(
            content=content,
            thread_id=thread_id,
            author_id=author_id,
            file_url=file_url,
        )
        try:
            db.add(post)
            db.flush()
            crud_notification.create_mentions(
                db,
                content=content,
                author_id=author_id,
                thread_id=thread_id,
                post_id=post.id,
            )
            db.commit()
            db.refresh(post)
        except Exception:
            db.rollback()
            raise
        return post

    def delete_post(self, db: Session, *, post_id: Any) -> int:
        """Delete a post and the notifications pointing at it.

        Returns the deleted post id.

        Raises:
            NotFoundError: If no post has this id
        """
        post = self.get(db, post_id)
        if not post:
            raise NotFoundError("post_not_found")
        pk, thread_id = post.id, post.thread_id

        try:
            db.execute(delete(Notification).where(Notification.post_id == pk))
            db.execute(delete(Post).where(Post.id == pk))
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Post deleted: id={pk}, thread_id={thread_id}")
        return pk


# Singleton instance
crud_post = CRUDPost(Post)
