"""Search endpoint."""

from fastapi import APIRouter, Depends, Query

from iswear_forum.api.deps import RequestContext, get_request_context
from iswear_forum.crud import crud_thread, crud_user
from iswear_forum.schemas.forum import SearchResponse

router = APIRouter(tags=["Search"])

SEARCH_LIMIT = 20


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search threads and users",
    description="Case-insensitive substring match on thread titles and usernames.",
)
def search(
    q: str = Query("", max_length=100),
    ctx: RequestContext = Depends(get_request_context),
) -> SearchResponse:
    query = q.strip()
    if not query:
        return SearchResponse(threads=[], users=[])
    return SearchResponse(
        threads=crud_thread.search(ctx.db, query=query, limit=SEARCH_LIMIT),
        users=crud_user.search(ctx.db, query=query, limit=SEARCH_LIMIT),
    )
