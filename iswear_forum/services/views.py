"""View assembly: folds rows into the nested shapes the UI renders.

Every author attached here goes through `safe_user`, so no response built from
these helpers can carry a password hash. Lookups are batched per listing: one
query for all authors and one grouped count for all reply counts.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from iswear_forum.models.category import Category
from iswear_forum.models.post import Post
from iswear_forum.models.thread import Thread
from iswear_forum.models.user import User, UserRole, UserStatus
from iswear_forum.schemas.forum import (
    CategoryResponse,
    CategoryWithThreads,
    PostWithAuthor,
    ThreadWithAuthor,
    ThreadWithPosts,
)
from iswear_forum.schemas.user import SafeUser

GHOST_AUTHOR_ID = 0
GHOST_AUTHOR_NAME = "Ghost"
DEFAULT_AVATAR_URL = "https://api.dicebear.com/7.x/identicon/svg?seed={username}"


def safe_user(user: User) -> SafeUser:
    """Project a user row without its password hash."""
    return SafeUser.model_validate(user)


def ghost_author() -> SafeUser:
    """Placeholder for an author id that no longer resolves to a user."""
    return SafeUser(
        id=GHOST_AUTHOR_ID,
        username=GHOST_AUTHOR_NAME,
        role=UserRole.MEMBER,
        status=UserStatus.APPROVED,
    )


def with_default_avatar(user: SafeUser) -> SafeUser:
    """Fill in a deterministic identicon when the user has no avatar."""
    if user.avatar_url:
        return user
    return user.model_copy(
        update={"avatar_url": DEFAULT_AVATAR_URL.format(username=user.username)}
    )


def load_authors(db: Session, author_ids: Iterable[int]) -> Dict[int, SafeUser]:
    """Resolve a set of user ids in one query. Unknown ids map to the ghost author."""
    ids = {author_id for author_id in author_ids if author_id is not None}
    if not ids:
        return {}
    rows = db.scalars(select(User).where(User.id.in_(ids))).all()
    found = {user.id: safe_user(user) for user in rows}
    return {author_id: found.get(author_id) or ghost_author() for author_id in ids}


def reply_counts(db: Session, thread_ids: Iterable[int]) -> Dict[int, int]:
    """Replies per thread: post count minus the opening post, floored at zero."""
    ids = set(thread_ids)
    if not ids:
        return {}
    stmt = (
        select(Post.thread_id, func.count(Post.id))
        .where(Post.thread_id.in_(ids))
        .group_by(Post.thread_id)
    )
    counts = {thread_id: count for thread_id, count in db.execute(stmt).all()}
    return {thread_id: max(0, counts.get(thread_id, 0) - 1) for thread_id in ids}


def _thread_fields(thread: Thread) -> dict:
    return dict(
        id=thread.id,
        title=thread.title,
        content=thread.content,
        category_id=thread.category_id,
        author_id=thread.author_id,
        created_at=thread.created_at,
    )


def threads_with_authors(db: Session, threads: List[Thread]) -> List[ThreadWithAuthor]:
    """Attach author and reply count to each thread, keeping input order."""
    authors = load_authors(db, (thread.author_id for thread in threads))
    counts = reply_counts(db, (thread.id for thread in threads))
    return [
        ThreadWithAuthor(
            **_thread_fields(thread),
            author=authors.get(thread.author_id) or ghost_author(),
            reply_count=counts.get(thread.id, 0),
        )
        for thread in threads
    ]


def _post_with_author(post: Post, authors: Dict[int, SafeUser]) -> PostWithAuthor:
    return PostWithAuthor(
        id=post.id,
        content=post.content,
        thread_id=post.thread_id,
        author_id=post.author_id,
        file_url=post.file_url,
        created_at=post.created_at,
        updated_at=post.updated_at,
        author=authors.get(post.author_id) or ghost_author(),
    )


def category_with_threads(
    category: Category, threads: List[ThreadWithAuthor]
) -> CategoryWithThreads:
    return CategoryWithThreads(
        **CategoryResponse.model_validate(category).model_dump(),
        threads=threads,
    )


def thread_with_posts(
    db: Session,
    thread: Thread,
    posts: List[Post],
    category: Optional[Category],
) -> ThreadWithPosts:
    """Thread page view. Post authors and the thread author share one lookup."""
    authors = load_authors(
        db, [thread.author_id] + [post.author_id for post in posts]
    )
    return ThreadWithPosts(
        **_thread_fields(thread),
        author=authors.get(thread.author_id) or ghost_author(),
        reply_count=max(0, len(posts) - 1),
        category=CategoryResponse.model_validate(category) if category else None,
        posts=[_post_with_author(post, authors) for post in posts],
    )
