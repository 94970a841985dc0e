"""Attribution comments in the schematic title block."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from circuitsnips.models.types import WrapOptions
from circuitsnips.schematic.wrapper import ensure_full_file
from circuitsnips.utils.sexp_parser import (
    escape_string,
    find_child_block,
    find_root,
    iter_child_blocks,
    remove_sexp_block,
)

# Title block comment slots KiCad shows on the sheet
COMMENT_SLOTS = range(1, 5)
_TITLE_BLOCK_ANCHORS = ("version", "generator", "generator_version", "uuid", "paper")


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _comment_number(block: str, start: int, end: int) -> int | None:
    tokens = block[start + len("(comment"):end].split()
    try:
        return int(tokens[0])
    except (IndexError, ValueError):
        return None


def set_title_block_comments(text: str, comments: list[str]) -> str:
    """Write ``comments`` into title block slots 1..n of a full file.

    Existing comments in slots 1-4 are replaced. A title block is created
    after the header when the file has none. Text without a ``kicad_sch``
    root is returned unchanged.
    """
    root = find_root(text)
    if root is None:
        return text

    entries = "".join(
        f"\n    (comment {number} {escape_string(comment)})"
        for number, comment in zip(COMMENT_SLOTS, comments)
    )

    title_block = find_child_block(text, root[0], "title_block")
    if title_block is not None:
        start, end = title_block
        block = text[start:end + 1]
        for keyword, s, e in reversed(list(iter_child_blocks(block, 0))):
            if keyword == "comment" and _comment_number(block, s, e) in COMMENT_SLOTS:
                block = remove_sexp_block(block, s, e)
        block = block[:-1].rstrip() + entries + "\n  )"
        return text[:start] + block + text[end + 1:]

    insert_at = root[0] + len("(kicad_sch")
    for keyword, _start, end in iter_child_blocks(text, root[0]):
        if keyword in _TITLE_BLOCK_ANCHORS:
            insert_at = end + 1
    return text[:insert_at] + "\n\n  (title_block" + entries + "\n  )" + text[insert_at:]


def add_attribution(full_file: str, author: str, url: str, license: str) -> str:
    """Stamp source, author, license and download date on a full file."""
    return set_title_block_comments(full_file, [
        f"Source: {url}",
        f"Author: {author}",
        f"License: {license}",
        f"Downloaded: {_today()}",
    ])


def add_github_attribution(
    text: str,
    repo_owner: str,
    repo_name: str,
    repo_url: str,
    file_path: str,
    license: str,
    score: Optional[float] = None,
) -> str:
    """Stamp the GitHub origin of an imported circuit.

    Snippets are wrapped first, titled ``owner/name``.
    """
    full_file = ensure_full_file(text, WrapOptions(title=f"{repo_owner}/{repo_name}"))
    score_text = f" | Quality: {score:g}/10" if score is not None else ""
    return set_title_block_comments(full_file, [
        f"GitHub: {repo_url}",
        f"Source: {repo_owner}/{repo_name} | {file_path}",
        f"License: {license}{score_text}",
        f"Imported: {_today()} | CircuitSnips.com",
    ])
