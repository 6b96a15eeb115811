"""Category model for forum sections."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from ..database import Base


class Category(Base):
    """Forum section. `position` defines display order."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0, index=True)
    pinned_message = Column(Text, nullable=True)

    # Relationships
    threads = relationship("Thread", back_populates="category")
