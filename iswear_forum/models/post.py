"""Post model for thread messages."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Post(Base):
    """Message inside a thread."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    thread_id = Column(Integer, ForeignKey("threads.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Post Content
    content = Column(Text, nullable=False)
    file_url = Column(String(500), nullable=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, nullable=True, onupdate=func.now())

    __table_args__ = (
        Index("idx_post_thread_created", "thread_id", "created_at"),
    )

    # Relationships
    thread = relationship("Thread", back_populates="posts")
