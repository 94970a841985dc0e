"""Preview tools - 2 tools."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from circuitsnips.config import CircuitSnipsConfig
from circuitsnips.logging_config import get_logger
from circuitsnips.models.errors import PreviewNotFoundError
from circuitsnips.schematic.sanitize import remove_hierarchical_sheets
from circuitsnips.schematic.serving import serve_schematic
from circuitsnips.utils.preview_store import PreviewStore
from circuitsnips.utils.validation import validate_document_size, validate_preview_id

logger = get_logger("tools.preview")


def register_tools(mcp: FastMCP, store: PreviewStore, config: CircuitSnipsConfig) -> None:
    """Register preview tools on the MCP server."""

    @mcp.tool()
    def create_preview(text: str) -> str:
        """Store schematic or snippet text for a short-lived preview.

        Snippets are wrapped into a full file titled "Circuit Preview".

        Args:
            text: Schematic or snippet text.

        Returns:
            JSON with the preview id, its resource URI and expiry in seconds.
        """
        validate_document_size(text, config.max_document_bytes, config.max_document_lines)
        preview_id = store.put(text)
        return json.dumps({
            "status": "success",
            "preview_id": preview_id,
            "uri": f"circuitsnips://preview/{preview_id}",
            "expires_in": config.preview_ttl_seconds,
        }, indent=2)

    @mcp.tool()
    def get_preview(preview_id: str) -> str:
        """Fetch a stored preview as a viewer-ready file.

        Args:
            preview_id: Id returned by create_preview.

        Returns:
            JSON with the schematic text and response headers, or an error
            when the preview is unknown or expired.
        """
        validate_preview_id(preview_id)
        try:
            text = store.get(preview_id)
        except PreviewNotFoundError as e:
            logger.info("Preview lookup failed: %s", e)
            return json.dumps({"status": "error", "message": str(e)})
        served = serve_schematic(remove_hierarchical_sheets(text), preview_id, cache_seconds=0)
        return json.dumps({
            "status": "success",
            "filename": served.filename,
            "headers": served.headers,
            "schematic": served.body,
        }, indent=2)
