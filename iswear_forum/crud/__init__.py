"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .category import crud_category
from .thread import crud_thread
from .post import crud_post
from .notification import crud_notification
from .profile_comment import crud_profile_comment
from .user_session import crud_user_session


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_category",
    "crud_thread",
    "crud_post",
    "crud_notification",
    "crud_profile_comment",
    "crud_user_session",
]
