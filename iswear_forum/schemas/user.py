"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from iswear_forum.models.user import UserRole, UserStatus
from iswear_forum.schemas.common import CamelModel


class SafeUser(CamelModel):
    """User projection without the password hash. Every API response uses it."""
    id: int
    username: str
    email: Optional[str] = None
    icq: Optional[str] = None
    role: UserRole = UserRole.MEMBER
    status: UserStatus = UserStatus.PENDING
    application_reason: Optional[str] = None
    is_banned: bool = False
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    views: int = 0
    last_seen: Optional[datetime] = None
    created_at: Optional[datetime] = None


class CurrentUserResponse(SafeUser):
    """Identity of the session owner. `session_state` is AUTHENTICATED or PENDING_APPROVAL."""
    session_state: str


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)
    icq: Optional[str] = Field(None, max_length=32)
    application_reason: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r"^\w{3,30}$", v):
            raise ValueError("Username must be 3-30 letters, digits or underscores")
        return v

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "username": "n30n_runner",
            "email": "runner@example.com",
            "password": "h4ckth3pl4n3t",
            "icq": "12345678",
            "applicationReason": "Old BBS regular, here for the warez section",
        }
    })


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserProfileUpdate(CamelModel):
    """Fields a user may change on their own profile."""
    bio: Optional[str] = Field(None, max_length=2000)
    avatar_url: Optional[str] = Field(None, max_length=500)
    banner_url: Optional[str] = Field(None, max_length=500)
    icq: Optional[str] = Field(None, max_length=32)


class AdminUserUpdate(CamelModel):
    """Fields staff may change on any account."""
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    is_banned: Optional[bool] = None
