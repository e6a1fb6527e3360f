"""
Input validation functions for TeachAssist.

All validation functions follow the pattern:
1. Accept raw user input (string, int, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise ValidationError
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from urllib.parse import quote

from teachassist.config import settings
from teachassist.core.errors import TeachAssistError


class ValidationError(TeachAssistError):
    """Raised when user input fails validation."""

    status_code = 400
    code = "validation_error"


# ============================================================================
# Comma-separated Form Lists
# ============================================================================


def split_csv_list(value: str | list[str] | None) -> list[str]:
    """
    Normalize a profile list field.

    Accepts either a list or the comma-separated text the profile forms send
    ("Math, Science"). Items are trimmed; empty items are dropped.

    Args:
        value: Raw list or comma-separated string

    Returns:
        Cleaned list of strings
    """
    if value is None:
        return []

    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


# ============================================================================
# File Upload Validation
# ============================================================================

ALLOWED_UPLOAD_TYPES: frozenset[str] = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "text/plain",
    }
)


def validate_upload(content_type: str | None, size: int, *, max_bytes: int | None = None) -> None:
    """
    Validate an uploaded file against the size ceiling and type allow-list.

    Args:
        content_type: MIME type reported for the file
        size: File size in bytes
        max_bytes: Override for the size ceiling (default: settings.max_upload_bytes)

    Raises:
        ValidationError: If the file is too large or of a disallowed type
    """
    limit = max_bytes if max_bytes is not None else settings.max_upload_bytes

    if size > limit:
        raise ValidationError(f"File size must be less than {limit // (1024 * 1024)}MB")

    if content_type not in ALLOWED_UPLOAD_TYPES:
        raise ValidationError(
            "Invalid file type. Please upload PDF, Word, Excel, PowerPoint, or text files."
        )


def file_extension(filename: str) -> str:
    """Extension of an uploaded filename without the dot ("" if none)."""
    suffix = PurePosixPath(filename).suffix
    return suffix[1:].lower() if suffix else ""


def filename_stem(filename: str) -> str:
    """Default resource title for an upload: name up to the first dot."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    return name.split(".")[0] or name


# ============================================================================
# Display Helpers
# ============================================================================

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """
    Human-readable file size ("0 Bytes", "1.5 KB", "2 MB").

    Uses base 1024 and at most two decimals with trailing zeros dropped.
    """
    if size <= 0:
        return "0 Bytes"

    index = 0
    value = float(size)
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1

    value = round(value, 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"


_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def sanitize_filename(name: str) -> str:
    """Replace whitespace runs with underscores and drop path-unsafe characters."""
    return _UNSAFE_FILENAME_CHARS.sub("", re.sub(r"\s+", "_", name))


def content_disposition(filename: str) -> str:
    """Attachment header value; non-ASCII names use the RFC 5987 form."""
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "") or "download"
    if ascii_name == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
