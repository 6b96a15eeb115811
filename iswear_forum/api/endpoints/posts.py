"""Post endpoints."""

import logging

from fastapi import APIRouter, Depends, Response, status

from iswear_forum.api.deps import RequestContext, require_poster, require_user
from iswear_forum.core.exceptions import ForbiddenError, NotFoundError
from iswear_forum.core.permissions import can_delete
from iswear_forum.crud import crud_post
from iswear_forum.schemas.forum import PostCreate, PostResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to a thread",
    description="""
    Add a post to an existing thread. `@username` mentions notify those users.

    **Access:** Approved, non-banned accounts
    """,
)
def create_post(
    post_in: PostCreate,
    ctx: RequestContext = Depends(require_poster),
) -> PostResponse:
    post = crud_post.create_post(
        ctx.db,
        author_id=ctx.user.id,
        thread_id=post_in.thread_id,
        content=post_in.content,
        file_url=post_in.file_url,
    )
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete post",
)
def delete_post(
    post_id: str,
    ctx: RequestContext = Depends(require_user),
) -> Response:
    """Authors delete their own posts; staff delete any."""
    post = crud_post.get(ctx.db, post_id)
    if post is None:
        raise NotFoundError("post_not_found")
    if not can_delete(ctx.user, post.author_id):
        raise ForbiddenError("not_post_owner")

    crud_post.delete_post(ctx.db, post_id=post.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
