"""Turn full schematic files back into clipboard snippets."""

from __future__ import annotations

from circuitsnips.logging_config import get_logger
from circuitsnips.utils.sexp_parser import find_root, iter_child_blocks

logger = get_logger("schematic.snippet")

# Root children that describe the file rather than the circuit
FILE_ONLY_KEYWORDS = frozenset({
    "version",
    "generator",
    "generator_version",
    "uuid",
    "paper",
    "title_block",
    "sheet_instances",
    "symbol_instances",
    "embedded_fonts",
})


def extract_snippet(text: str) -> str:
    """Return the circuit body of a full file as paste-ready snippet text.

    Each body form is copied as a verbatim slice of the input, so formatting
    is never regenerated. Snippet input is returned unchanged.
    """
    root = find_root(text)
    if root is None:
        return text

    parts = [
        text[start:end + 1]
        for keyword, start, end in iter_child_blocks(text, root[0])
        if keyword not in FILE_ONLY_KEYWORDS
    ]
    logger.debug("Extracted %d body form(s) from full file", len(parts))
    return "\n\n".join(parts)
