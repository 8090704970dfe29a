"""
File handling utilities.
"""
from typing import Tuple, Any

from .sanitizers import coerce_number

ALLOWED_EXTENSIONS = ('.txt', '.pdf')


def max_upload_bytes(config: Any) -> int:
    """Configured upload size limit in bytes."""
    size_mb = coerce_number(config.max_file_size_mb, 10, 0.1, 100)
    return int(size_mb * 1024 * 1024)


def validate_file(file: Any, config: Any) -> Tuple[bool, str]:
    """
    Validate an uploaded resume file before extraction.

    Args:
        file: Uploaded file object (needs ``name``, ``seek`` and ``tell``)
        config: Configuration object

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not file.name.lower().endswith(ALLOWED_EXTENSIONS):
        return False, "Only .txt and .pdf files are supported"

    file.seek(0, 2)
    file_size = file.tell()
    file.seek(0)

    max_size = max_upload_bytes(config)

    if file_size > max_size:
        return False, f"File too large ({file_size / 1024 / 1024:.1f}MB). Max: {max_size / 1024 / 1024:.1f}MB"

    if file_size == 0:
        return False, "File is empty"

    return True, ""
