"""Pydantic schemas for `Notification` domain objects."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from iswear_forum.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    from_user_id: int
    thread_id: int
    post_id: int
    type: str = "mention"
    is_read: bool = False
    created_at: Optional[datetime] = None


class MarkAllReadResponse(CamelModel):
    marked: int = Field(..., description="Number of notifications marked as read")
