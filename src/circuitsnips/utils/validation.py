"""Input validation for text and identifiers arriving through the tool layer."""

from __future__ import annotations

import re

from circuitsnips.models.errors import DocumentTooLargeError, ValidationError

# preview-<epoch millis>-<hex suffix>
PREVIEW_ID_PATTERN = re.compile(r"^preview-\d+-[0-9a-f]+$")

# 32 hex digits, optionally grouped 8-4-4-4-12
UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}$"
)


def validate_document_size(text: str, max_bytes: int, max_lines: int) -> str:
    """Reject schematic text beyond the configured limits.

    Args:
        text: Schematic or snippet text.
        max_bytes: Largest accepted UTF-8 size.
        max_lines: Most accepted lines.

    Returns:
        The text unchanged.

    Raises:
        DocumentTooLargeError: If either limit is exceeded.
    """
    size = len(text.encode("utf-8"))
    if size > max_bytes:
        raise DocumentTooLargeError(
            f"Document is {size} bytes, limit is {max_bytes}",
            {"size": size, "max_bytes": max_bytes},
        )
    lines = text.count("\n") + 1
    if lines > max_lines:
        raise DocumentTooLargeError(
            f"Document has {lines} lines, limit is {max_lines}",
            {"lines": lines, "max_lines": max_lines},
        )
    return text


def validate_preview_id(preview_id: str) -> str:
    """Validate a preview identifier.

    Raises:
        ValidationError: If the id does not look like one ``PreviewStore`` issues.
    """
    if not preview_id or not PREVIEW_ID_PATTERN.match(preview_id):
        raise ValidationError(
            f"Invalid preview id: '{preview_id}'. Expected format: preview-<millis>-<hex>"
        )
    return preview_id


def validate_uuid(value: str) -> str:
    """Validate a UUID given for a wrapped document.

    Raises:
        ValidationError: If the value is not 32 hex digits.
    """
    if not UUID_PATTERN.match(value):
        raise ValidationError(f"Invalid UUID: '{value}'")
    return value
