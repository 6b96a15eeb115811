"""Thread endpoints."""

import logging

from fastapi import APIRouter, Depends, Response, status

from iswear_forum.api.deps import RequestContext, get_request_context, require_poster, require_user
from iswear_forum.core.exceptions import ForbiddenError, NotFoundError
from iswear_forum.core.permissions import can_delete
from iswear_forum.crud import crud_thread
from iswear_forum.schemas.forum import ThreadCreate, ThreadResponse, ThreadWithPosts

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/threads",
    tags=["Threads"],
)


@router.get(
    "/{thread_id}",
    response_model=ThreadWithPosts,
    summary="Get thread",
)
def get_thread(
    thread_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> ThreadWithPosts:
    """Thread with its category and every post, oldest first."""
    thread = crud_thread.get_thread(ctx.db, thread_id)
    if thread is None:
        raise NotFoundError("thread_not_found")
    return thread


@router.post(
    "",
    response_model=ThreadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create thread",
    description="""
    Create a thread; its content becomes the opening post.

    **Access:** Approved, non-banned accounts
    """,
)
def create_thread(
    thread_in: ThreadCreate,
    ctx: RequestContext = Depends(require_poster),
) -> ThreadResponse:
    thread, _ = crud_thread.create_thread(
        ctx.db,
        author_id=ctx.user.id,
        title=thread_in.title,
        content=thread_in.content,
        category_id=thread_in.category_id,
        file_url=thread_in.file_url,
    )
    return ThreadResponse.model_validate(thread)


@router.delete(
    "/{thread_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete thread",
    description="""
    Delete a thread with all of its posts.

    **Access:** The author, moderators and admins
    """,
)
def delete_thread(
    thread_id: str,
    ctx: RequestContext = Depends(require_user),
) -> Response:
    thread = crud_thread.get(ctx.db, thread_id)
    if thread is None:
        raise NotFoundError("thread_not_found")
    if not can_delete(ctx.user, thread.author_id):
        raise ForbiddenError("not_thread_owner")

    crud_thread.delete_thread(ctx.db, thread_id=thread.id)
    logger.info(f"Thread {thread_id} deleted by user id={ctx.user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
