"""Board statistics endpoint."""

from fastapi import APIRouter, Depends

from iswear_forum.api.deps import RequestContext, get_request_context
from iswear_forum.config import settings
from iswear_forum.crud import crud_thread, crud_user
from iswear_forum.schemas.statistics import ForumStatisticsResponse

router = APIRouter(tags=["Statistics"])


@router.get(
    "/stats",
    response_model=ForumStatisticsResponse,
    summary="Board statistics",
)
def get_stats(
    ctx: RequestContext = Depends(get_request_context),
) -> ForumStatisticsResponse:
    return ForumStatisticsResponse(
        user_count=crud_user.get_count(ctx.db),
        thread_count=crud_thread.get_count(ctx.db),
        online_users=crud_user.count_online(
            ctx.db, window_seconds=settings.ONLINE_WINDOW_SECONDS
        ),
    )
