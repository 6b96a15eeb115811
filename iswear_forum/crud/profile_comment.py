"""CRUD operations for profile wall comments."""

import logging
from typing import Any, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.core.exceptions import NotFoundError
from iswear_forum.crud.base import CRUDBase, coerce_id
from iswear_forum.models.profile_comment import ProfileComment
from iswear_forum.models.user import User
from iswear_forum.schemas.profile_comment import ProfileCommentCreate, ProfileCommentResponse
from iswear_forum.services.views import load_authors

logger = logging.getLogger(__name__)


class CRUDProfileComment(CRUDBase[ProfileComment, ProfileCommentCreate, dict]):
    def get_by_profile(self, db: Session, *, profile_id: Any, limit: int = 50) -> List[ProfileCommentResponse]:
        """Comments on a profile wall, newest first, each with its author."""
        pk = coerce_id(profile_id)
        if pk is None:
            return []
        stmt = (
            select(ProfileComment)
            .where(ProfileComment.profile_id == pk)
            .order_by(ProfileComment.created_at.desc(), ProfileComment.id.desc())
            .limit(limit)
        )
        try:
            comments = list(db.scalars(stmt).all())
            authors = load_authors(db, [c.author_id for c in comments])
        except SQLAlchemyError:
            logger.exception(f"Failed to load profile comments for profile_id={pk}")
            return []
        return [
            ProfileCommentResponse(
                id=c.id,
                profile_id=c.profile_id,
                author_id=c.author_id,
                content=c.content,
                created_at=c.created_at,
                author=authors[c.author_id],
            )
            for c in comments
        ]

    def create_comment(self, db: Session, *, profile_id: Any, author_id: int, content: str) -> ProfileComment:
        """Raises NotFoundError when the profile owner does not exist."""
        pk = coerce_id(profile_id)
        if pk is None or db.get(User, pk) is None:
            raise NotFoundError("user_not_found")
        comment = self.create(
            db, obj_in={"profile_id": pk, "author_id": author_id, "content": content}
        )
        logger.info(f"Profile comment created: id={comment.id}, profile_id={pk}, author_id={author_id}")
        return comment


# Singleton instance
crud_profile_comment = CRUDProfileComment(ProfileComment)
