"""User endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from iswear_forum.api.deps import RequestContext, get_request_context, require_staff, require_user
from iswear_forum.core.exceptions import ForbiddenError, NotFoundError
from iswear_forum.core.permissions import can_change_roles
from iswear_forum.crud import crud_thread, crud_user
from iswear_forum.crud.base import coerce_id
from iswear_forum.schemas.forum import ThreadWithAuthor
from iswear_forum.schemas.user import AdminUserUpdate, SafeUser, UserProfileUpdate
from iswear_forum.services.views import safe_user, with_default_avatar

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get(
    "",
    response_model=List[SafeUser],
    summary="List users",
    description="""
    Every account, oldest first.

    **Access:** Any logged-in user
    """,
)
def list_users(
    ctx: RequestContext = Depends(require_user),
) -> List[SafeUser]:
    return [with_default_avatar(user) for user in crud_user.list_users(ctx.db)]


@router.get(
    "/{user_id}",
    response_model=SafeUser,
    summary="Get user",
)
def get_user(
    user_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> SafeUser:
    user = crud_user.get(ctx.db, user_id)
    if user is None:
        raise NotFoundError("user_not_found")
    return with_default_avatar(safe_user(user))


@router.get(
    "/{user_id}/threads",
    response_model=List[ThreadWithAuthor],
    summary="List a user's threads",
)
def get_user_threads(
    user_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> List[ThreadWithAuthor]:
    if crud_user.get(ctx.db, user_id) is None:
        raise NotFoundError("user_not_found")
    return crud_thread.get_by_user(ctx.db, user_id=user_id)


@router.patch(
    "/{user_id}",
    response_model=SafeUser,
    summary="Update own profile",
    description="""
    Change bio, avatar, banner or ICQ number.

    **Access:** The profile owner only
    """,
)
def update_profile(
    user_id: str,
    profile_in: UserProfileUpdate,
    ctx: RequestContext = Depends(require_user),
) -> SafeUser:
    if coerce_id(user_id) != ctx.user.id:
        raise ForbiddenError("not_profile_owner")
    user = crud_user.update_user(ctx.db, user_id=ctx.user.id, obj_in=profile_in)
    return safe_user(user)


@router.patch(
    "/{user_id}/admin",
    response_model=SafeUser,
    summary="Moderate user",
    description="""
    Change role, approval status or ban state.

    **Access:** Moderators and admins. Only admins change roles, and nobody
    bans themselves.
    """,
)
def moderate_user(
    user_id: str,
    update_in: AdminUserUpdate,
    ctx: RequestContext = Depends(require_staff),
) -> SafeUser:
    target = crud_user.get(ctx.db, user_id)
    if target is None:
        raise NotFoundError("user_not_found")

    changes = {k: v for k, v in update_in.model_dump(exclude_unset=True).items() if v is not None}
    if "role" in changes and not can_change_roles(ctx.user.role):
        raise ForbiddenError("only_admin_can_change_roles")
    if "is_banned" in changes and target.id == ctx.user.id:
        raise ForbiddenError("cannot_ban_self")

    user = crud_user.update_user(ctx.db, user_id=target.id, obj_in=changes)
    logger.info(f"User id={user.id} moderated by id={ctx.user.id}: {sorted(changes)}")
    return safe_user(user)
