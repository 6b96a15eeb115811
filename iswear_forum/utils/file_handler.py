"""File upload handling for post attachments."""
import logging
import uuid
from pathlib import Path
from typing import Set, Tuple

from fastapi import UploadFile

from iswear_forum.config import settings
from iswear_forum.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# ============================================
# FILE TYPE DEFINITIONS
# ============================================

# Magic bytes signatures for file type validation
MAGIC_BYTES = {
    ".png": [b"\x89PNG\r\n\x1a\n"],
}

ALLOWED_EXTENSIONS: Set[str] = {".png", ".txt"}


# ============================================
# VALIDATION
# ============================================

def validate_magic_bytes(file_content: bytes, file_ext: str) -> bool:
    """Check the file signature for extensions that have one."""
    signatures = MAGIC_BYTES.get(file_ext)
    if signatures is None:
        return True
    return any(file_content.startswith(signature) for signature in signatures)


def sanitize_filename(filename: str) -> str:
    """
    Reduce a client filename to a safe basename.

    Only alphanumerics, dash, underscore and dot survive; leading dots are
    stripped so the result is never a hidden file.
    """
    if not filename:
        return "unnamed"

    basename = Path(filename).name
    safe_chars = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_.")
    sanitized = "".join(c if c in safe_chars else "_" for c in basename)
    sanitized = sanitized.lstrip(".")

    return sanitized if sanitized else "unnamed"


def get_file_extension(filename: str) -> str:
    """Safely get file extension in lowercase."""
    if not filename:
        return ""
    return Path(filename).suffix.lower()


def validate_upload_file(upload_file: UploadFile) -> Tuple[bytes, str]:
    """
    Validate an attachment.

    Returns:
        Tuple of (file_content, file_extension)

    Raises:
        ValidationError: On a missing, empty, oversized or mismatched file
    """
    if not upload_file or not upload_file.filename:
        raise ValidationError("file_missing")

    original_filename = sanitize_filename(upload_file.filename)
    file_ext = get_file_extension(original_filename)
    if file_ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"file_type_not_allowed: accepted {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    upload_file.file.seek(0)
    file_content = upload_file.file.read()

    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError("file_too_large")
    if len(file_content) == 0:
        raise ValidationError("file_empty")

    if not validate_magic_bytes(file_content, file_ext):
        logger.warning(f"Magic bytes mismatch - filename: {original_filename}")
        raise ValidationError("file_content_mismatch")

    if file_ext == ".txt":
        try:
            file_content.decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationError("file_not_utf8")

    return file_content, file_ext


# ============================================
# STORAGE
# ============================================

def save_upload_file(upload_file: UploadFile) -> Tuple[str, str]:
    """
    Validate and store an attachment under UPLOAD_DIR with a random name.

    Returns:
        Tuple of (public URL, stored file name)
    """
    file_content, file_ext = validate_upload_file(upload_file)

    unique_filename = f"{uuid.uuid4().hex}{file_ext}"
    upload_path = Path(settings.UPLOAD_DIR)
    upload_path.mkdir(parents=True, exist_ok=True)

    file_path = upload_path / unique_filename
    with open(file_path, "wb") as f:
        f.write(file_content)
    logger.info(f"File saved: {file_path} ({len(file_content)} bytes)")

    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{unique_filename}", unique_filename
