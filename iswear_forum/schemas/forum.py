"""Pydantic schemas for categories, threads and posts."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from iswear_forum.schemas.common import CamelModel
from iswear_forum.schemas.user import SafeUser


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    position: int = 0
    pinned_message: Optional[str] = None


class ThreadCreate(CamelModel):
    """Schema for creating a thread. `content` becomes the first post."""
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    category_id: int = Field(..., gt=0)
    file_url: Optional[str] = Field(None, max_length=500)


class ThreadResponse(CamelModel):
    id: int
    title: str
    content: str
    category_id: int
    author_id: int
    created_at: Optional[datetime] = None


class ThreadWithAuthor(ThreadResponse):
    """Thread enriched with its author and reply count."""
    author: SafeUser
    reply_count: int = 0


class PostCreate(CamelModel):
    """Schema for creating a reply."""
    content: str = Field(..., min_length=1)
    thread_id: int = Field(..., gt=0)
    file_url: Optional[str] = Field(None, max_length=500)


class PostResponse(CamelModel):
    id: int
    content: str
    thread_id: int
    author_id: int
    file_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostWithAuthor(PostResponse):
    author: SafeUser


class ThreadWithPosts(ThreadWithAuthor):
    """Thread page: posts oldest first, each with its author."""
    category: Optional[CategoryResponse] = None
    posts: List[PostWithAuthor] = []


class CategoryWithThreads(CategoryResponse):
    threads: List[ThreadWithAuthor] = []


class SearchResponse(CamelModel):
    threads: List[ThreadWithAuthor]
    users: List[SafeUser]
