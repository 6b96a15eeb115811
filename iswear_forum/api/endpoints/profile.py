"""Profile page endpoints: view counter and the comment wall."""

from typing import List

from fastapi import APIRouter, Depends, status

from iswear_forum.api.deps import RequestContext, get_request_context, require_poster
from iswear_forum.core.exceptions import NotFoundError
from iswear_forum.crud import crud_profile_comment, crud_user
from iswear_forum.schemas.profile_comment import ProfileCommentCreate, ProfileCommentResponse
from iswear_forum.schemas.user import SafeUser
from iswear_forum.services.views import safe_user, with_default_avatar

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
)


@router.get(
    "/{user_id}",
    response_model=SafeUser,
    summary="View profile",
    description="Returns the profile and counts the visit.",
)
def view_profile(
    user_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> SafeUser:
    crud_user.increment_views(ctx.db, user_id=user_id)
    user = crud_user.get(ctx.db, user_id)
    if user is None:
        raise NotFoundError("user_not_found")
    return with_default_avatar(safe_user(user))


@router.get(
    "/{user_id}/comments",
    response_model=List[ProfileCommentResponse],
    summary="List profile comments",
)
def list_profile_comments(
    user_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> List[ProfileCommentResponse]:
    if crud_user.get(ctx.db, user_id) is None:
        raise NotFoundError("user_not_found")
    return crud_profile_comment.get_by_profile(ctx.db, profile_id=user_id)


@router.post(
    "/{user_id}/comments",
    response_model=ProfileCommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a profile",
)
def create_profile_comment(
    user_id: str,
    comment_in: ProfileCommentCreate,
    ctx: RequestContext = Depends(require_poster),
) -> ProfileCommentResponse:
    comment = crud_profile_comment.create_comment(
        ctx.db, profile_id=user_id, author_id=ctx.user.id, content=comment_in.content
    )
    return ProfileCommentResponse(
        id=comment.id,
        profile_id=comment.profile_id,
        author_id=comment.author_id,
        content=comment.content,
        created_at=comment.created_at,
        author=safe_user(ctx.user),
    )
