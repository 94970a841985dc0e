"""Balanced-structure scanning and parsing for KiCad S-expression text.

Everything here works on raw text and skips string literals, so parens inside
``"..."`` never count. Scans are linear and never recurse.
"""

from __future__ import annotations

from typing import Any, Iterator

import sexpdata

from circuitsnips.models.types import BalanceResult

ROOT_KEYWORD = "kicad_sch"

_WHITESPACE = (" ", "\t", "\n", "\r")
_ATOM_STOP = _WHITESPACE + ("(", ")", '"')


def skip_string_literal(content: str, start: int) -> int:
    """Return the index of the quote closing the literal opened at ``start``.

    A backslash escapes the character after it, so ``\\"`` stays inside the
    literal and ``\\\\"`` closes it. Returns ``len(content)`` when the literal
    is never closed.
    """
    i = start + 1
    length = len(content)
    while i < length:
        ch = content[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i
        i += 1
    return length


def check_balance(content: str) -> BalanceResult:
    """Check parenthesis balance in a single left-to-right pass.

    Args:
        content: Raw S-expression text.

    Returns:
        ``BalanceResult``. When a ``)`` has no matching ``(`` the scan stops,
        ``balance`` is -1 and ``first_imbalance_index`` is that character's
        index. A string literal still open at the end of input is reported by
        the index of its opening quote.
    """
    depth = 0
    i = 0
    length = len(content)
    while i < length:
        ch = content[i]
        if ch == '"':
            close = skip_string_literal(content, i)
            if close >= length:
                return BalanceResult(balance=depth, unterminated_string_index=i)
            i = close
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return BalanceResult(balance=depth, first_imbalance_index=i)
        i += 1
    return BalanceResult(balance=depth)


def walk_balanced_parens(content: str, start: int) -> int | None:
    """Walk forward from an opening paren to find the matching close paren.

    Args:
        content: Full text.
        start: Index of the opening ``(`` character.

    Returns:
        Index of the matching ``)`` (inclusive), or ``None`` if unbalanced.
    """
    depth = 0
    i = start
    length = len(content)
    while i < length:
        ch = content[i]
        if ch == '"':
            i = skip_string_literal(content, i)
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def read_keyword(content: str, start: int) -> str:
    """Return the atom directly after the ``(`` at ``start`` (``""`` if none)."""
    j = start + 1
    while j < len(content) and content[j] not in _ATOM_STOP:
        j += 1
    return content[start + 1:j]


def _iter_blocks(content: str, pos: int, stop: int) -> Iterator[tuple[str, int, int]]:
    i = pos
    while i < stop:
        ch = content[i]
        if ch == '"':
            i = skip_string_literal(content, i) + 1
            continue
        if ch == "(":
            end = walk_balanced_parens(content, i)
            if end is None:
                return
            yield read_keyword(content, i), i, end
            i = end + 1
            continue
        if ch == ")":
            return
        i += 1


def iter_child_blocks(content: str, start: int) -> Iterator[tuple[str, int, int]]:
    """Yield ``(keyword, start, end)`` for each direct child list of a list.

    Args:
        content: Full text.
        start: Index of the parent's opening ``(``.

    Iteration stops at the parent's close paren, or at the first child whose
    close paren is missing.
    """
    end = walk_balanced_parens(content, start)
    stop = end if end is not None else len(content)
    yield from _iter_blocks(content, start + 1, stop)


def iter_top_level_blocks(content: str) -> Iterator[tuple[str, int, int]]:
    """Yield ``(keyword, start, end)`` for each top-level list in the text."""
    yield from _iter_blocks(content, 0, len(content))


def find_root(content: str) -> tuple[int, int] | None:
    """Locate the ``(kicad_sch ...)`` root form.

    Returns:
        ``(start, end)`` inclusive, or ``None`` when the text does not open
        with the root form or the root is never closed.
    """
    start = len(content) - len(content.lstrip())
    if read_keyword(content, start) != ROOT_KEYWORD or not content.startswith("(", start):
        return None
    end = walk_balanced_parens(content, start)
    if end is None:
        return None
    return start, end


def find_child_block(content: str, parent_start: int, keyword: str) -> tuple[int, int] | None:
    """Find the first direct child of a list whose keyword matches."""
    for child_keyword, start, end in iter_child_blocks(content, parent_start):
        if child_keyword == keyword:
            return start, end
    return None


def remove_sexp_block(content: str, start: int, end: int) -> str:
    """Remove an S-expression block and the whitespace it leaves behind.

    Indentation before the block is dropped. When the block sat on a line of
    its own, the line break after it goes too, so no blank line is left.

    Args:
        content: Full text.
        start: Start index of the block to remove.
        end: End index of the block (inclusive).

    Returns:
        The text with the block removed.
    """
    before = content[:start].rstrip(" \t")
    after = content[end + 1:]

    own_line = not before or before.endswith("\n")
    if own_line:
        if after.startswith("\r\n"):
            after = after[2:]
        elif after.startswith("\n"):
            after = after[1:]
    return before + after


def escape_string(value: str) -> str:
    """Quote a value as a KiCad string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def parse_sexp(content: str) -> list[Any]:
    """Parse S-expression text into nested lists, one entry per top-level form.

    Atoms become ``str``, numbers ``int``/``float``, string literals ``str``,
    and lists ``list``.

    Raises:
        Whatever ``sexpdata`` raises for text it cannot read.
    """
    parsed = sexpdata.parse(content, nil=None, true=None)
    return [_normalize_sexpdata(item) for item in parsed]


def _normalize_sexpdata(data: Any) -> Any:
    """Convert sexpdata types to plain Python types."""
    if isinstance(data, sexpdata.Symbol):
        return str(data)
    elif isinstance(data, list):
        return [_normalize_sexpdata(item) for item in data]
    elif isinstance(data, (str, int, float)):
        return data
    else:
        return str(data)
