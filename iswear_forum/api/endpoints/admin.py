"""Staff-only endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from iswear_forum.api.deps import RequestContext, require_staff
from iswear_forum.api.endpoints.users import moderate_user
from iswear_forum.crud import crud_post, crud_thread, crud_user
from iswear_forum.schemas.user import AdminUserUpdate, SafeUser

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
)


@router.get(
    "/users",
    response_model=List[SafeUser],
    summary="List users for moderation",
    description="Includes pending applications and their reasons.",
)
def list_users(
    ctx: RequestContext = Depends(require_staff),
) -> List[SafeUser]:
    return crud_user.list_users(ctx.db)


@router.patch(
    "/users/{user_id}",
    response_model=SafeUser,
    summary="Moderate user",
    description="Same rules as `PATCH /api/users/{user_id}/admin`.",
)
def update_user(
    user_id: str,
    update_in: AdminUserUpdate,
    ctx: RequestContext = Depends(require_staff),
) -> SafeUser:
    return moderate_user(user_id, update_in, ctx)


@router.delete(
    "/threads/{thread_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete any thread",
)
def delete_thread(
    thread_id: str,
    ctx: RequestContext = Depends(require_staff),
) -> Response:
    crud_thread.delete_thread(ctx.db, thread_id=thread_id)
    logger.info(f"Thread {thread_id} removed by staff id={ctx.user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete any post",
)
def delete_post(
    post_id: str,
    ctx: RequestContext = Depends(require_staff),
) -> Response:
    crud_post.delete_post(ctx.db, post_id=post_id)
    logger.info(f"Post {post_id} removed by staff id={ctx.user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
