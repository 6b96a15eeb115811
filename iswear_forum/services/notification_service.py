"""Service layer for mention notifications."""

import logging
import re
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from iswear_forum.models.user import User

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@(\w+)")


class NotificationService:
    """
    Service for turning `@username` mentions into notification recipients.

    Each distinct existing user mentioned in a post is a recipient, except
    the author mentioning themselves.
    """

    @staticmethod
    def parse_mentions(content: str) -> List[str]:
        """Distinct mentioned usernames in order of first appearance."""
        seen = []
        for name in MENTION_PATTERN.findall(content or ""):
            if name not in seen:
                seen.append(name)
        return seen

    def mention_recipients(self, db: Session, *, content: str, author_id: int) -> List[User]:
        """
        Users to notify for a new thread or post.

        Args:
            db: Database session
            content: Body of the new thread or post
            author_id: Who wrote it

        Returns:
            Existing users mentioned in `content`, without the author
        """
        names = self.parse_mentions(content)
        if not names:
            return []
        recipients = list(
            db.scalars(select(User).where(User.username.in_(names), User.id != author_id)).all()
        )
        if len(recipients) < len(names):
            logger.debug(f"Ignored mentions of unknown users: {len(names) - len(recipients)}")
        return recipients


# Singleton instance
notification_service = NotificationService()
