"""Notification endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from iswear_forum.api.deps import RequestContext, require_user
from iswear_forum.crud import crud_notification
from iswear_forum.schemas.notification import MarkAllReadResponse, NotificationResponse

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.get(
    "",
    response_model=List[NotificationResponse],
    summary="My notifications",
)
def list_notifications(
    ctx: RequestContext = Depends(require_user),
) -> List[NotificationResponse]:
    """Notifications addressed to the caller, newest first."""
    return crud_notification.get_by_user(ctx.db, user_id=ctx.user.id)


@router.post(
    "/read",
    response_model=MarkAllReadResponse,
    summary="Mark all as read",
)
def mark_all_read(
    ctx: RequestContext = Depends(require_user),
) -> MarkAllReadResponse:
    marked = crud_notification.mark_all_read(ctx.db, user_id=ctx.user.id)
    return MarkAllReadResponse(marked=marked)
