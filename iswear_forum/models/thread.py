"""Thread model for forum discussions."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Thread(Base):
    """Forum thread. Its body is also stored as the first post."""

    __tablename__ = "threads"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Thread Content
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)

    __table_args__ = (
        Index("idx_thread_category_created", "category_id", "created_at"),
        Index("idx_thread_author_created", "author_id", "created_at"),
    )

    # Relationships
    category = relationship("Category", back_populates="threads")
    posts = relationship(
        "Post",
        back_populates="thread",
        order_by="Post.created_at.asc()",
    )
