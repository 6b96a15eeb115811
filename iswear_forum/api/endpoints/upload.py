"""Upload endpoint for post attachments."""

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status

from iswear_forum.api.deps import RequestContext, require_user
from iswear_forum.schemas.upload import UploadResponse
from iswear_forum.utils.file_handler import save_upload_file

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an attachment",
    description="""
    Store a single `.png` or `.txt` file and return its public URL.

    - **file**: PNG image or UTF-8 text file
    """,
)
def upload_file(
    file: UploadFile = File(...),
    ctx: RequestContext = Depends(require_user),
) -> UploadResponse:
    url, file_name = save_upload_file(file)
    logger.info(f"Upload by user id={ctx.user.id}: {file_name}")
    return UploadResponse(url=url, file_name=file_name)
