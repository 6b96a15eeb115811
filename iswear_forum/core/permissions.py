"""Role capabilities.

Call sites ask these functions instead of comparing role strings.
"""

from typing import Optional

from iswear_forum.models.user import User, UserRole, UserStatus

MODERATION_ROLES = frozenset({UserRole.ADMIN, UserRole.MODERATOR})


def can_moderate(role: Optional[str]) -> bool:
    """Moderators and admins can delete any content and approve or ban users."""
    if role is None:
        return False
    return UserRole(role) in MODERATION_ROLES


def can_change_roles(role: Optional[str]) -> bool:
    """Only admins hand out roles."""
    return role is not None and UserRole(role) == UserRole.ADMIN


def is_approved(user: User) -> bool:
    """Admins are always treated as approved."""
    return user.status == UserStatus.APPROVED.value or user.role == UserRole.ADMIN.value


def can_post(user: User) -> bool:
    """Approved, non-banned accounts may create threads, posts and comments."""
    return is_approved(user) and not user.is_banned


def can_delete(actor: User, author_id: int) -> bool:
    """Authors can delete their own content; moderators can delete anything."""
    return actor.id == author_id or can_moderate(actor.role)


__all__ = [
    "MODERATION_ROLES",
    "can_moderate",
    "can_change_roles",
    "is_approved",
    "can_post",
    "can_delete",
]
