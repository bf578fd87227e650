"""Upload staging on local disk.

Uploads are written to a staging directory only long enough to read
their metadata and hand them to the image host, then removed.
"""

import logging
import re
import uuid
from pathlib import Path
from typing import Union

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from geostamp.core.exceptions import ValidationException

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def safe_extension(filename: str) -> str:
    """Lowercased extension of a client filename, stripped of anything odd.

    Example:
        >>> safe_extension("../../IMG 0001.JPG")
        '.jpg'
        >>> safe_extension("photo.j/p:g")
        ''
    """
    suffix = Path(filename or "").suffix.lower()
    if not re.fullmatch(r"\.[a-z0-9]{1,10}", suffix):
        return ""
    return suffix


async def stage_upload(
    upload: UploadFile,
    upload_dir: Union[str, Path],
    max_bytes: int,
) -> Path:
    """Write an uploaded file to the staging directory.

    The file is stored under a random name (keeping a sanitized
    extension) so client filenames never reach the filesystem.

    Args:
        upload: Incoming multipart file.
        upload_dir: Staging directory; created if missing.
        max_bytes: Size limit.

    Returns:
        Path of the staged file.

    Raises:
        ValidationException: If the file is empty or larger than ``max_bytes``.
    """
    directory = Path(upload_dir)
    await run_in_threadpool(directory.mkdir, parents=True, exist_ok=True)
    path = directory / f"{uuid.uuid4()}{safe_extension(upload.filename)}"

    # Disk I/O stays off the event loop
    size = 0
    f = await run_in_threadpool(path.open, "wb")
    try:
        while chunk := await upload.read(CHUNK_SIZE):
            size += len(chunk)
            if size > max_bytes:
                break
            await run_in_threadpool(f.write, chunk)
    finally:
        await run_in_threadpool(f.close)

    if size == 0 or size > max_bytes:
        discard_staged(path)
        if size == 0:
            raise ValidationException("Uploaded file is empty", details={"filename": upload.filename})
        raise ValidationException(
            "Uploaded file is too large",
            details={"filename": upload.filename, "max_bytes": max_bytes},
        )

    logger.debug(f"Staged {upload.filename!r} as {path} ({size} bytes)")
    return path


def discard_staged(path: Path) -> None:
    """Remove a staged file (best effort - don't fail if can't delete)."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to delete staged file {path}: {e}")
