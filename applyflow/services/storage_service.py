"""
Resume file storage.

PDFs live under ``STORAGE_DIR/resumes/<user_id>/<unix_ms>_<name>``. The
path relative to ``STORAGE_DIR`` is what gets stored on the Resume row.
"""
import logging
import re
import time
from pathlib import Path
from typing import Optional

from applyflow.core import config

logger = logging.getLogger(__name__)

BUCKET_NAME = "resumes"
ALLOWED_CONTENT_TYPE = "application/pdf"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace anything outside [A-Za-z0-9._-] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename or "resume.pdf")


def validate_resume_upload(content_type: Optional[str], size: int, max_size: Optional[int] = None) -> None:
    """
    Check an upload before it is written.

    Raises:
        ValueError: if the file is not a PDF or is too large
    """
    max_size = max_size if max_size is not None else config.MAX_RESUME_SIZE
    if content_type != ALLOWED_CONTENT_TYPE:
        raise ValueError("Only PDF files are allowed")
    if size > max_size:
        raise ValueError(f"File size must be less than {max_size // (1024 * 1024)}MB")
    if size == 0:
        raise ValueError("File is empty")


def _root(storage_dir: Optional[str] = None) -> Path:
    return Path(storage_dir or config.STORAGE_DIR)


def resolve_path(file_url: str, storage_dir: Optional[str] = None) -> Path:
    """
    Absolute path for a stored file url.

    Raises:
        ValueError: if the url points outside the storage directory
    """
    root = _root(storage_dir).resolve()
    path = (root / file_url).resolve()
    if root not in path.parents:
        raise ValueError("Invalid file path")
    return path


def save_resume_file(
    user_id: str,
    filename: str,
    content: bytes,
    content_type: Optional[str],
    storage_dir: Optional[str] = None,
) -> str:
    """
    Validate and write a resume PDF.

    Returns:
        The file url (path relative to the storage directory)
    """
    validate_resume_upload(content_type, len(content))

    timestamp = int(time.time() * 1000)
    relative = Path(BUCKET_NAME) / sanitize_filename(user_id) / f"{timestamp}_{sanitize_filename(filename)}"
    target = _root(storage_dir) / relative
    target.parent.mkdir(parents=True, exist_ok=True)

    if target.exists():
        raise ValueError("A file with this name already exists")

    target.write_bytes(content)
    logger.info(f"Resume file stored: user_id={user_id}, path={relative.as_posix()}, size={len(content)}")
    return relative.as_posix()


def delete_resume_file(file_url: str, storage_dir: Optional[str] = None) -> bool:
    """Remove a stored file. Returns False when it was already gone."""
    path = resolve_path(file_url, storage_dir)
    if not path.exists():
        logger.warning(f"Resume file already missing: path={file_url}")
        return False
    path.unlink()
    logger.info(f"Resume file deleted: path={file_url}")
    return True
