"""CRUD operations for Thread."""

import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.core.exceptions import NotFoundError
from iswear_forum.crud.base import CRUDBase, coerce_id, contains_pattern
from iswear_forum.models.category import Category
from iswear_forum.crud.notification import crud_notification
from iswear_forum.models.notification import Notification
from iswear_forum.models.post import Post
from iswear_forum.models.thread import Thread
from iswear_forum.schemas.forum import ThreadCreate, ThreadWithAuthor, ThreadWithPosts
from iswear_forum.services.views import thread_with_posts, threads_with_authors

logger = logging.getLogger(__name__)

NEWEST_FIRST = (Thread.created_at.desc(), Thread.id.desc())


class CRUDThread(CRUDBase[Thread, ThreadCreate, dict]):
    """CRUD operations for Thread."""

    def get_thread(self, db: Session, id: Any) -> Optional[ThreadWithPosts]:
        """Thread page: author, category and every post oldest first.

        A thread removed while it is being assembled comes back as None.
        """
        thread = self.get(db, id)
        if not thread:
            return None
        try:
            posts = list(
                db.scalars(
                    select(Post)
                    .where(Post.thread_id == thread.id)
                    .order_by(Post.created_at.asc(), Post.id.asc())
                ).all()
            )
            category = db.get(Category, thread.category_id)
            return thread_with_posts(db, thread, posts, category)
        except SQLAlchemyError:
            logger.exception(f"Failed to assemble thread id={thread.id}")
            return None

    def get_by_user(self, db: Session, *, user_id: Any, limit: int = 20) -> List[ThreadWithAuthor]:
        """A user's threads, most recent first."""
        pk = coerce_id(user_id)
        if pk is None:
            return []
        stmt = select(Thread).where(Thread.author_id == pk).order_by(*NEWEST_FIRST).limit(limit)
        try:
            return threads_with_authors(db, list(db.scalars(stmt).all()))
        except SQLAlchemyError:
            logger.exception(f"Failed to load threads for user id={pk}")
            return []

    def search(self, db: Session, *, query: str, limit: int = 20) -> List[ThreadWithAuthor]:
        """Case-insensitive title match, most recent first."""
        stmt = (
            select(Thread)
            .where(Thread.title.ilike(contains_pattern(query), escape="\\"))
            .order_by(*NEWEST_FIRST)
            .limit(limit)
        )
        try:
            return threads_with_authors(db, list(db.scalars(stmt).all()))
        except SQLAlchemyError:
            logger.exception("Thread search failed")
            return []

    def create_thread(
        self,
        db: Session,
        *,
        author_id: int,
        title: str,
        content: str,
        category_id: int,
        file_url: Optional[str] = None,
    ) -> Tuple[Thread, Post]:
        """Create a thread, its opening post and its mention notifications in one transaction.

        Returns:
            (thread, opening_post)

        Raises:
            NotFoundError: If the category does not exist
        """
        if db.get(Category, category_id) is None:
            raise NotFoundError("category_not_found")

        thread = Thread(
            title=title,
            content=content,
            category_id=category_id,
            author_id=author_id,
        )
        try:
            db.add(thread)
            db.flush()
            opening_post = Post(
                content=content,
                thread_id=thread.id,
                author_id=author_id,
                file_url=file_url,
            )
            db.add(opening_post)
            db.flush()
            crud_notification.create_mentions(
                db,
                content=content,
                author_id=author_id,
                thread_id=thread.id,
                post_id=opening_post.id,
            )
            db.commit()
            db.refresh(thread)
            db.refresh(opening_post)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Thread created: id={thread.id}, category_id={category_id}, author_id={author_id}")
        return thread, opening_post

    def delete_thread(self, db: Session, *, thread_id: Any) -> int:
        """Delete a thread together with its posts and their notifications.

        Returns the deleted thread id.

        Raises:
            NotFoundError: If no thread has this id
        """
        thread = self.get(db, thread_id)
        if not thread:
            raise NotFoundError("thread_not_found")
        pk = thread.id

        try:
            db.execute(delete(Notification).where(Notification.thread_id == pk))
            db.execute(delete(Post).where(Post.thread_id == pk))
            db.execute(delete(Thread).where(Thread.id == pk))
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Thread deleted: id={pk}")
        return pk


# Singleton instance
crud_thread = CRUDThread(Thread)
