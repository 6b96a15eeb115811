"""Pydantic schemas for profile wall comments."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from iswear_forum.schemas.common import CamelModel
from iswear_forum.schemas.user import SafeUser


class ProfileCommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)


class ProfileCommentResponse(CamelModel):
    id: int
    profile_id: int
    author_id: int
    content: str
    created_at: Optional[datetime] = None
    author: SafeUser
