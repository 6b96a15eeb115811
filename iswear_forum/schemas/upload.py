"""Upload response schema."""

from iswear_forum.schemas.common import CamelModel


class UploadResponse(CamelModel):
    """Public URL of a stored attachment."""
    url: str
    file_name: str
