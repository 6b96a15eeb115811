from enum import Enum

from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from ..database import Base


class UserRole(str, Enum):
    """Forum roles, lowest to highest."""
    MEMBER = "MEMBER"
    OLDGEN = "OLDGEN"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """Membership application status."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def _in_clause(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Authentication & Contact
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    icq = Column(String(32))
    password_hash = Column(String(255), nullable=False)

    # Role & Authorization
    role = Column(String(20), nullable=False, default=UserRole.MEMBER.value, index=True)
    status = Column(String(20), nullable=False, default=UserStatus.PENDING.value, index=True)
    application_reason = Column(Text, nullable=False, default="")
    is_banned = Column(Boolean, nullable=False, default=False)

    # Profile
    bio = Column(Text)
    avatar_url = Column(String(500))
    banner_url = Column(String(500))
    views = Column(Integer, nullable=False, default=0)

    # Timestamps
    last_seen = Column(TIMESTAMP, server_default=func.now())
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)

    # Constraints
    __table_args__ = (
        CheckConstraint(_in_clause("role", UserRole), name="check_user_role"),
        CheckConstraint(_in_clause("status", UserStatus), name="check_user_status"),
    )
