"""Corruption heuristics.

These flag text that is probably the output of a broken serializer. None of
them is a structural violation, so callers get warnings only.
"""

from __future__ import annotations

import re

MIN_AVG_LINE_LENGTH = 20
MIN_LINES_FOR_LINE_LENGTH_CHECK = 100
MAX_CONSECUTIVE_SPACES = 100
MAX_CONSECUTIVE_NEWLINES = 10
MAX_SYMBOLS_WITHOUT_WIRES = 10

# A block of at least MIN_REPEAT_BLOCK characters occurring MIN_REPEAT_COPIES
# times in a row. Blocks longer than MAX_REPEAT_BLOCK are not looked for.
MIN_REPEAT_BLOCK = 50
MAX_REPEAT_BLOCK = 2000
MIN_REPEAT_COPIES = 4

_SPACE_RUN = re.compile(" {%d,}" % MAX_CONSECUTIVE_SPACES)
_NEWLINE_RUN = re.compile("\n{%d,}" % MAX_CONSECUTIVE_NEWLINES)

SYMBOL_INSTANCE_LINE = re.compile(r"^\s*\(symbol\s+\(", re.MULTILINE)
WIRE_LINE = re.compile(r"^\s*\(wire\b", re.MULTILINE)
LIB_SYMBOLS_LINE = re.compile(r"^\s*\(lib_symbols\b", re.MULTILINE)
LABEL_LINE = re.compile(r"^\s*\((?:label|global_label|hierarchical_label)\b", re.MULTILINE)


def _common_prefix_length(left: str, right: str) -> int:
    for index, (a, b) in enumerate(zip(left, right)):
        if a != b:
            return index
    return min(len(left), len(right))


def has_repeated_run(text: str) -> bool:
    """Return True if some block of text repeats back to back.

    A run of ``MIN_REPEAT_COPIES`` copies of a block of length ``period``
    always contains a sampled offset (every ``MIN_REPEAT_BLOCK`` characters)
    inside its first copy, and the window at that offset recurs exactly
    ``period`` characters later. Only those recurrences are checked, and
    only up to ``MAX_REPEAT_BLOCK`` ahead, so the scan stays linear in the
    length of the text.
    """
    step = MIN_REPEAT_BLOCK
    size = len(text)
    for start in range(0, max(0, size - step * (MIN_REPEAT_COPIES - 1)), step):
        window = text[start:start + step]
        limit = min(size, start + MAX_REPEAT_BLOCK + step)
        found = text.find(window, start + step, limit)
        while found != -1:
            period = found - start
            if text[start:found] == text[found:found + period]:
                # positions k with text[k] == text[k + period], around start
                need = period * (MIN_REPEAT_COPIES - 1)
                ahead = _common_prefix_length(
                    text[start:start + need], text[found:found + need]
                )
                low = max(0, start - need)
                behind = _common_prefix_length(
                    text[low:start][::-1], text[low + period:found][::-1]
                )
                if ahead + behind >= need:
                    return True
            found = text.find(window, found + 1, limit)
    return False


def detect_corruption(text: str) -> list[str]:
    """Return a warning for each corruption pattern found in ``text``."""
    warnings: list[str] = []

    lines = text.split("\n")
    avg_chars = len(text) / len(lines)
    if avg_chars < MIN_AVG_LINE_LENGTH and len(lines) > MIN_LINES_FOR_LINE_LENGTH_CHECK:
        warnings.append(
            f"Suspiciously low characters per line ({avg_chars:.1f} avg). "
            "Data may have corrupted formatting."
        )

    if _SPACE_RUN.search(text):
        warnings.append("Data contains excessive whitespace which may indicate corruption.")

    if _NEWLINE_RUN.search(text):
        warnings.append("Data contains excessive blank lines which may indicate corruption.")

    if has_repeated_run(text):
        warnings.append(
            "Data contains suspiciously repeated content which may indicate corruption."
        )

    if "\0" in text:
        warnings.append("Data contains null bytes which is invalid in S-expressions.")

    symbol_count = len(SYMBOL_INSTANCE_LINE.findall(text))
    wire_count = len(WIRE_LINE.findall(text))
    if symbol_count > MAX_SYMBOLS_WITHOUT_WIRES and wire_count == 0:
        warnings.append(
            f"Schematic has {symbol_count} symbols but no wires. "
            "Elements may not have been extracted properly."
        )

    return warnings
