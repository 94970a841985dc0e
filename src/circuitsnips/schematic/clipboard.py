"""Checks on snippet text before it is handed to the clipboard.

Pasting oversized or malformed text into KiCad can hang the editor or corrupt
the project, so these limits are stricter than upload validation.
"""

from __future__ import annotations

import re

from circuitsnips.models.types import ClipboardCheck, ClipboardStats
from circuitsnips.schematic.heuristics import (
    LABEL_LINE,
    LIB_SYMBOLS_LINE,
    SYMBOL_INSTANCE_LINE,
    WIRE_LINE,
    detect_corruption,
)
from circuitsnips.utils.sexp_parser import check_balance

MAX_CLIPBOARD_SIZE = 1024 * 1024
WARN_CLIPBOARD_SIZE = 512 * 1024
MAX_LINES = 50_000

_BINARY = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")
_CONTROL = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
_HAS_SYMBOL_INSTANCES = re.compile(r"\(symbol\s+\(lib_id")
_EMPTY_LIB_SYMBOLS = re.compile(r"\(lib_symbols\s*\)")


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} bytes"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _count_elements(data: str, size: int) -> ClipboardStats:
    return ClipboardStats(
        size=size,
        line_count=data.count("\n") + 1,
        lib_symbol_count=len(LIB_SYMBOLS_LINE.findall(data)),
        symbol_count=len(SYMBOL_INSTANCE_LINE.findall(data)),
        wire_count=len(WIRE_LINE.findall(data)),
        label_count=len(LABEL_LINE.findall(data)),
    )


def _structure_diagnostics(data: str) -> tuple[list[str], list[str]]:
    errors: list[str] = []
    warnings: list[str] = []

    balance = check_balance(data)
    if balance.first_imbalance_index is not None:
        errors.append(
            "Unbalanced parentheses: found closing ')' without matching '(' "
            f"at position {balance.first_imbalance_index}"
        )
    elif balance.unterminated_string_index is not None:
        errors.append(
            "Unterminated string literal starting at position "
            f"{balance.unterminated_string_index}"
        )
    elif balance.balance > 0:
        errors.append(f"Unbalanced parentheses: {balance.balance} unclosed '(' found")

    has_symbols = bool(_HAS_SYMBOL_INSTANCES.search(data))
    if has_symbols and "(lib_symbols" not in data:
        warnings.append(
            "Snippet has symbol instances but no lib_symbols definitions. "
            "KiCad may not be able to display symbols correctly."
        )
    if has_symbols and _EMPTY_LIB_SYMBOLS.search(data):
        warnings.append(
            "lib_symbols section is empty but symbols are present. "
            "This may cause rendering issues."
        )
    return errors, warnings


def validate_clipboard_data(data: str) -> ClipboardCheck:
    """Check snippet text for size, binary content, structure and corruption."""
    errors: list[str] = []
    warnings: list[str] = []

    size = len(data.encode("utf-8"))
    stats = _count_elements(data, size)

    if size > MAX_CLIPBOARD_SIZE:
        errors.append(
            f"Data too large ({format_size(size)}). "
            f"Maximum allowed is {format_size(MAX_CLIPBOARD_SIZE)}."
        )
    elif size > WARN_CLIPBOARD_SIZE:
        warnings.append(
            f"Large data size ({format_size(size)}). This may take time to paste in KiCad."
        )

    if stats.line_count > MAX_LINES:
        errors.append(f"Too many lines ({stats.line_count}). Maximum allowed is {MAX_LINES}.")

    if _BINARY.search(data):
        errors.append("Data contains binary or non-printable characters.")

    structure_errors, structure_warnings = _structure_diagnostics(data)
    errors.extend(structure_errors)
    warnings.extend(structure_warnings)
    warnings.extend(detect_corruption(data))

    return ClipboardCheck(valid=not errors, errors=errors, warnings=warnings, stats=stats)


def sanitize_clipboard_data(data: str) -> str:
    """Collapse whitespace runs and strip control characters.

    Only meant for data that produced warnings but no errors.
    """
    result = re.sub(r" {4,}", "  ", data)
    result = re.sub(r"\n{3,}", "\n\n", result)
    return _CONTROL.sub("", result)
