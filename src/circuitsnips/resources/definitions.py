"""MCP resource definitions - 2 resources."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from circuitsnips.config import CircuitSnipsConfig
from circuitsnips.logging_config import get_logger
from circuitsnips.models.types import PaperSize
from circuitsnips.schematic.classify import SNIPPET_ELEMENTS
from circuitsnips.schematic.clipboard import MAX_CLIPBOARD_SIZE, MAX_LINES
from circuitsnips.schematic.paper import SHEET_SIZES
from circuitsnips.schematic.sanitize import remove_hierarchical_sheets
from circuitsnips.schematic.validator import MIN_FORMAT_VERSION
from circuitsnips.schematic.wrapper import GENERATOR, WRAPPER_FORMAT_VERSION
from circuitsnips.utils.preview_store import PreviewStore
from circuitsnips.utils.validation import validate_preview_id

logger = get_logger("resources")


def register_resources(mcp: FastMCP, store: PreviewStore, config: CircuitSnipsConfig) -> None:
    """Register MCP resources on the server."""

    @mcp.resource("circuitsnips://formats")
    def formats_resource() -> str:
        """Describe accepted input and generated output formats.

        Returns the minimum format version, snippet elements, sheet sizes and
        size limits.
        """
        return json.dumps({
            "min_format_version": MIN_FORMAT_VERSION,
            "wrapper_format_version": WRAPPER_FORMAT_VERSION,
            "generator": GENERATOR,
            "snippet_elements": sorted(SNIPPET_ELEMENTS),
            "paper_sizes": [size.value for size in PaperSize],
            "auto_sheet_sizes": {
                size.value: {"width": area.width, "height": area.height}
                for size, area in SHEET_SIZES.items()
            },
            "limits": {
                "max_document_bytes": config.max_document_bytes,
                "max_document_lines": config.max_document_lines,
                "max_clipboard_bytes": MAX_CLIPBOARD_SIZE,
                "max_clipboard_lines": MAX_LINES,
            },
        }, indent=2)

    @mcp.resource("circuitsnips://preview/{preview_id}")
    def preview_resource(preview_id: str) -> str:
        """Get a stored preview schematic as plain text.

        Raises PreviewNotFoundError when the preview is unknown or expired.
        """
        text = store.get(validate_preview_id(preview_id))
        logger.debug("Served preview resource %s", preview_id)
        return remove_hierarchical_sheets(text)
