"""Server-side login session."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from ..database import Base


class UserSession(Base):
    __tablename__ = "user_sessions"

    # Random opaque id, referenced from the signed session cookie
    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    expires_at = Column(TIMESTAMP, nullable=False, index=True)
