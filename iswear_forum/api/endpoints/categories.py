"""Category endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from iswear_forum.api.deps import RequestContext, get_request_context
from iswear_forum.core.exceptions import NotFoundError
from iswear_forum.crud import crud_category
from iswear_forum.crud.base import coerce_id
from iswear_forum.schemas.forum import CategoryWithThreads

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


@router.get(
    "",
    response_model=List[CategoryWithThreads],
    summary="List categories",
    description="Categories by position, each with its five most recent threads.",
)
def list_categories(
    ctx: RequestContext = Depends(get_request_context),
) -> List[CategoryWithThreads]:
    return crud_category.get_categories(ctx.db)


@router.get(
    "/{category_id}",
    response_model=CategoryWithThreads,
    summary="Get category",
    description="""
    One category with every thread, most recent first.

    A non-numeric id is looked up by category name.
    """,
)
def get_category(
    category_id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> CategoryWithThreads:
    pk = coerce_id(category_id)
    if pk is None:
        by_name = crud_category.get_by_name(ctx.db, category_id)
        pk = by_name.id if by_name else None

    category = crud_category.get_category(ctx.db, pk) if pk else None
    if category is None:
        raise NotFoundError("category_not_found")
    return category
