from .common import CamelModel, MessageResponse
from .user import (
    SafeUser,
    CurrentUserResponse,
    RegisterRequest,
    LoginRequest,
    UserProfileUpdate,
    AdminUserUpdate,
)
from .forum import (
    CategoryResponse,
    CategoryWithThreads,
    ThreadCreate,
    ThreadResponse,
    ThreadWithAuthor,
    ThreadWithPosts,
    PostCreate,
    PostResponse,
    PostWithAuthor,
    SearchResponse,
)
from .notification import NotificationResponse, MarkAllReadResponse
from .profile_comment import ProfileCommentCreate, ProfileCommentResponse
from .statistics import ForumStatisticsResponse
from .upload import UploadResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    # User
    "SafeUser",
    "CurrentUserResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserProfileUpdate",
    "AdminUserUpdate",
    # Forum
    "CategoryResponse",
    "CategoryWithThreads",
    "ThreadCreate",
    "ThreadResponse",
    "ThreadWithAuthor",
    "ThreadWithPosts",
    "PostCreate",
    "PostResponse",
    "PostWithAuthor",
    "SearchResponse",
    # Notification
    "NotificationResponse",
    "MarkAllReadResponse",
    # Profile comments
    "ProfileCommentCreate",
    "ProfileCommentResponse",
    # Misc
    "ForumStatisticsResponse",
    "UploadResponse",
]
