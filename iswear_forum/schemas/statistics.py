"""Statistics schemas for the board header."""

from pydantic import Field

from iswear_forum.schemas.common import CamelModel


class ForumStatisticsResponse(CamelModel):
    """Response schema for forum statistics."""

    user_count: int = Field(..., description="Registered accounts")
    thread_count: int = Field(..., description="Threads across all categories")
    online_users: int = Field(..., description="Accounts seen within the online window")
