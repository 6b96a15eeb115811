"""
SQLAlchemy Models for the iswear forum
"""

from ..database import Base
from .user import User, UserRole, UserStatus
from .category import Category
from .thread import Thread
from .post import Post
from .notification import Notification
from .profile_comment import ProfileComment
from .user_session import UserSession

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "UserStatus",
    "Category",
    "Thread",
    "Post",
    "Notification",
    "ProfileComment",
    "UserSession",
]
