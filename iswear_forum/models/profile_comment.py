"""ProfileComment model for user profile walls."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from ..database import Base


class ProfileComment(Base):
    """Comment left on another user's profile."""

    __tablename__ = "profile_comments"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    profile_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    content = Column(Text, nullable=False)

    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)

    __table_args__ = (
        Index("idx_profile_comment_profile", "profile_id", "created_at"),
    )
