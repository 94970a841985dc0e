"""Viewer-ready schematic text and the response that carries it."""

from __future__ import annotations

from typing import Optional

from circuitsnips.logging_config import get_logger
from circuitsnips.models.types import PaperSize, ServedSchematic, WrapOptions
from circuitsnips.schematic.classify import as_snippet
from circuitsnips.schematic.paper import replace_paper_size, select_sheet_size
from circuitsnips.schematic.sanitize import remove_hierarchical_sheets
from circuitsnips.schematic.validator import validate_schematic
from circuitsnips.schematic.wrapper import wrap_snippet

logger = get_logger("schematic.serving")

SCHEMATIC_EXTENSION = ".kicad_sch"


def prepare_for_viewer(
    text: str,
    title: str,
    circuit_id: str,
    paper_size: Optional[PaperSize] = None,
) -> str:
    """Turn stored upload content into a file a schematic viewer can load.

    1. Paper size: ``paper_size`` when given, otherwise the smallest sheet
       that holds the content.
    2. Snippets are wrapped (uuid = circuit id); full files get their paper
       form rewritten.
    3. Hierarchical sheet references are removed.
    """
    if paper_size is None:
        paper_size = PaperSize.A4
        verdict = validate_schematic(text)
        if verdict.valid and verdict.metadata is not None:
            paper_size = select_sheet_size(verdict.metadata.bounding_box).size

    snippet = as_snippet(text)
    if snippet is not None:
        processed = wrap_snippet(
            snippet, WrapOptions(title=title, uuid=circuit_id, paper_size=paper_size),
        )
    else:
        processed = replace_paper_size(text, paper_size)

    logger.debug("Prepared %s for viewer on %s paper", circuit_id, paper_size.value)
    return remove_hierarchical_sheets(processed)


def schematic_filename(name: str) -> str:
    """Filename with the extension viewers use to recognise the payload."""
    cleaned = name.replace('"', "").replace("\\", "").replace("/", "-").strip()
    if not cleaned:
        cleaned = "schematic"
    if not cleaned.endswith(SCHEMATIC_EXTENSION):
        cleaned += SCHEMATIC_EXTENSION
    return cleaned


def serve_schematic(text: str, filename: str, cache_seconds: int = 3600) -> ServedSchematic:
    """Wrap schematic text in plain-text response metadata.

    The content type stays ``text/plain``; browser-embedded viewers pick the
    format from the ``.kicad_sch`` filename instead.
    """
    name = schematic_filename(filename)
    if cache_seconds > 0:
        cache_control = f"public, max-age={cache_seconds}"
    else:
        cache_control = "no-cache, no-store, must-revalidate"
    return ServedSchematic(
        body=text,
        filename=name,
        content_disposition=f'inline; filename="{name}"',
        cache_control=cache_control,
    )
