"""Strip hierarchical sheet references before serving a schematic.

Viewers try to load the file a ``(sheet ...)`` points at. Standalone sheet
files are never stored here, so both the sheet symbols and the
``(sheet_instances ...)`` bookkeeping are removed.
"""

from __future__ import annotations

from circuitsnips.logging_config import get_logger
from circuitsnips.utils.sexp_parser import (
    read_keyword,
    remove_sexp_block,
    skip_string_literal,
    walk_balanced_parens,
)

logger = get_logger("schematic.sanitize")

HIERARCHICAL_KEYWORDS = frozenset({"sheet", "sheet_instances"})


def _find_sheet_blocks(content: str) -> list[tuple[int, int]]:
    """Spans of every sheet form at any depth, outermost only."""
    spans: list[tuple[int, int]] = []
    i = 0
    length = len(content)
    while i < length:
        ch = content[i]
        if ch == '"':
            i = skip_string_literal(content, i) + 1
            continue
        if ch == "(" and read_keyword(content, i) in HIERARCHICAL_KEYWORDS:
            end = walk_balanced_parens(content, i)
            if end is not None:
                spans.append((i, end))
                i = end + 1
                continue
            # Unclosed: keep it, removing would leave a dangling paren
            logger.debug("Unclosed %s form at %d left in place", read_keyword(content, i), i)
        i += 1
    return spans


def remove_hierarchical_sheets(text: str) -> str:
    """Remove every ``sheet`` and ``sheet_instances`` form.

    Each form is matched by keyword and consumed up to its matching close
    paren, however deep its sub-forms go. Parens in string literals are
    ignored. The result has the same form (snippet or full file) as the input
    and the same balance.
    """
    spans = _find_sheet_blocks(text)
    if not spans:
        return text

    result = text
    # Back to front so earlier spans keep their offsets
    for start, end in reversed(spans):
        result = remove_sexp_block(result, start, end)
    logger.debug("Removed %d hierarchical sheet form(s)", len(spans))
    return result
