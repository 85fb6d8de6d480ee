"""Profile picture storage on local disk. Stored files are served under /uploads."""

import logging
import re
import time
import uuid
from pathlib import Path

from fastapi import UploadFile

from rollcall.core.config import settings
from rollcall.core.errors import InternalError, UploadError

logger = logging.getLogger(__name__)

PROFILE_PIC_FIELD = "profile_pic"
UPLOADS_URL_PATH = "/uploads"

_SAFE_SUFFIX_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


def upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR)


def is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def _stored_name(original: str | None) -> str:
    suffix = Path(original or "").suffix.lower()
    if not _SAFE_SUFFIX_RE.match(suffix):
        suffix = ""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{suffix}"


async def save_profile_pic(file: UploadFile, directory: Path | None = None) -> str:
    """
    Validate and store an uploaded image; return the stored file name.

    Only image/* content types up to UPLOAD_MAX_BYTES are accepted. The name
    is generated here, never taken from the client.
    """
    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise UploadError("Only image files are allowed!")

    limit = settings.UPLOAD_MAX_BYTES
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise UploadError(f"File too large. Maximum size allowed is {limit / (1024 * 1024):g}MB.")

    target_dir = directory or upload_dir()
    name = _stored_name(file.filename)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / name).write_bytes(content)
    except OSError as e:
        logger.exception("Could not store profile picture in %s", target_dir)
        raise InternalError() from e
    logger.info("Stored profile picture %s (%d bytes)", name, len(content))
    return name


def remove_profile_pic(name: str | None, directory: Path | None = None) -> None:
    """Delete a stored picture. A missing file is ignored; other failures are logged."""
    if not name:
        return
    path = (directory or upload_dir()) / Path(name).name
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not delete old profile picture %s", path, exc_info=True)
