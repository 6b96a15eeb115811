"""CRUD operations for Category."""

import logging
from collections import defaultdict
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.crud.base import CRUDBase
from iswear_forum.models.category import Category
from iswear_forum.models.thread import Thread
from iswear_forum.schemas.forum import CategoryWithThreads
from iswear_forum.services.views import category_with_threads, threads_with_authors

logger = logging.getLogger(__name__)

# Threads shown per category on the board index
RECENT_THREADS_PER_CATEGORY = 5

DEFAULT_CATEGORIES = [
    {"name": "General", "description": "Off-topic chatter and introductions", "position": 1},
    {"name": "Hardware", "description": "Rigs, mods and soldering irons", "position": 2},
    {"name": "Software", "description": "Code, tools and operating systems", "position": 3},
    {"name": "Security", "description": "Exploits, CTFs and defensive tricks", "position": 4},
    {"name": "Media", "description": "Music, films and retro games", "position": 5},
    {"name": "Archive", "description": "Old threads worth keeping", "position": 6},
]

NEWEST_FIRST = (Thread.created_at.desc(), Thread.id.desc())


class CRUDCategory(CRUDBase[Category, dict, dict]):
    """CRUD operations for Category."""

    def _recent_threads_by_category(self, db: Session, limit: int) -> List[Thread]:
        """Top `limit` newest threads of every category in a single query."""
        ranked = select(
            Thread.id.label("thread_id"),
            func.row_number()
            .over(partition_by=Thread.category_id, order_by=NEWEST_FIRST)
            .label("row_rank"),
        ).subquery()
        stmt = (
            select(Thread)
            .join(ranked, ranked.c.thread_id == Thread.id)
            .where(ranked.c.row_rank <= limit)
            .order_by(*NEWEST_FIRST)
        )
        return list(db.scalars(stmt).all())

    def get_categories(self, db: Session) -> List[CategoryWithThreads]:
        """All categories by position, each with its most recent threads."""
        try:
            categories = db.scalars(
                select(Category).order_by(Category.position.asc(), Category.id.asc())
            ).all()
            threads = threads_with_authors(
                db, self._recent_threads_by_category(db, RECENT_THREADS_PER_CATEGORY)
            )
        except SQLAlchemyError:
            logger.exception("Failed to load categories")
            return []

        by_category = defaultdict(list)
        for thread in threads:
            by_category[thread.category_id].append(thread)
        return [
            category_with_threads(category, by_category.get(category.id, []))
            for category in categories
        ]

    def get_category(self, db: Session, id: Any) -> Optional[CategoryWithThreads]:
        """One category with its full thread list, most recent first."""
        category = self.get(db, id)
        if not category:
            return None
        stmt = select(Thread).where(Thread.category_id == category.id).order_by(*NEWEST_FIRST)
        try:
            threads = threads_with_authors(db, list(db.scalars(stmt).all()))
        except SQLAlchemyError:
            logger.exception(f"Failed to load threads for category id={category.id}")
            return None
        return category_with_threads(category, threads)

    def get_by_name(self, db: Session, name: str) -> Optional[Category]:
        """Case-insensitive lookup by name."""
        stmt = select(Category).where(func.lower(Category.name) == name.lower()).limit(1)
        try:
            return db.scalars(stmt).first()
        except SQLAlchemyError:
            logger.exception(f"Failed to load category name={name}")
            return None

    def seed_categories(self, db: Session) -> int:
        """Insert the default sections when the table is empty.

        Returns the number of categories created (0 when already seeded).
        """
        if self.get_count(db) > 0:
            return 0
        try:
            db.add_all([Category(**fields) for fields in DEFAULT_CATEGORIES])
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} categories")
        return len(DEFAULT_CATEGORIES)


# Singleton instance
crud_category = CRUDCategory(Category)
