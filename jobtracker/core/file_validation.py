"""
Document file rules.

Filename sanitization, storage path derivation and upload validation.
The storage path is derived once at upload time and persisted, so the
download path always matches the upload path.

Dependencies: re (stdlib)
System role: Pure validation helpers for document uploads
"""

import re
from dataclasses import dataclass, field

MAX_FILE_SIZE = 50 * 1024 * 1024

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/zip",
    "application/x-zip-compressed",
})

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


@dataclass
class FileValidationResult:
    """Outcome of validate_file."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


def sanitize_filename(filename: str) -> str:
    """
    Replace every character outside [A-Za-z0-9._-] with an underscore.

    Idempotent: sanitizing an already sanitized name returns it unchanged.

    Args:
        filename: Original filename

    Returns:
        str: Storage-safe filename
    """
    return _UNSAFE_CHARS.sub("_", filename)


def generate_document_path(
    user_id: object,
    application_id: object,
    document_id: object,
    filename: str,
) -> str:
    """
    Build the object storage key for a document.

    Args:
        user_id: Owner ID
        application_id: Parent application ID
        document_id: Document ID
        filename: Original filename

    Returns:
        str: "{user_id}/{application_id}/{document_id}-{sanitized filename}"
    """
    return f"{user_id}/{application_id}/{document_id}-{sanitize_filename(filename)}"


def validate_file(
    filename: str,
    size: int,
    mime_type: str | None,
    max_size: int = MAX_FILE_SIZE,
) -> FileValidationResult:
    """
    Check an upload against size, type and name rules.

    Args:
        filename: Original filename
        size: File size in bytes
        mime_type: Declared content type
        max_size: Maximum size in bytes

    Returns:
        FileValidationResult: Validity flag and every rule violation found
    """
    errors: list[str] = []

    if size <= 0:
        errors.append("File is empty")
    elif size > max_size:
        errors.append(f"File size exceeds {max_size // (1024 * 1024)}MB limit")

    if mime_type not in ALLOWED_MIME_TYPES:
        errors.append(f"File type {mime_type or 'unknown'} is not allowed")

    if not filename or ".." in filename or "/" in filename:
        errors.append("Invalid filename")

    return FileValidationResult(is_valid=not errors, errors=errors)
