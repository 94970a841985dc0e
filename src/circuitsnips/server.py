"""FastMCP server creation and tool/resource registration."""

from __future__ import annotations

from fastmcp import FastMCP

from circuitsnips import __version__
from circuitsnips.config import CircuitSnipsConfig
from circuitsnips.logging_config import get_logger, setup_logging
from circuitsnips.resources.definitions import register_resources
from circuitsnips.tools import importer, preview, schematic
from circuitsnips.utils.preview_store import PreviewStore

logger = get_logger("server")


def create_server(config: CircuitSnipsConfig | None = None) -> FastMCP:
    """Create and configure the CircuitSnips MCP server.

    Args:
        config: Server configuration. Uses defaults/env vars if not provided.

    Returns:
        Configured FastMCP server instance ready to run.
    """
    if config is None:
        config = CircuitSnipsConfig()

    setup_logging(
        level=config.log_level.value,
        log_file=config.get_log_file_path(),
    )
    logger.info("CircuitSnips MCP Server v%s starting", __version__)

    store = PreviewStore(
        ttl_seconds=config.preview_ttl_seconds,
        max_entries=config.preview_max_entries,
    )

    mcp = FastMCP(
        "CircuitSnips",
        version=__version__,
    )

    schematic.register_tools(mcp, config)
    preview.register_tools(mcp, store, config)
    importer.register_tools(mcp, config)

    register_resources(mcp, store, config)

    logger.info(
        "Server ready: document limit %d bytes / %d lines, preview ttl %ds",
        config.max_document_bytes,
        config.max_document_lines,
        config.preview_ttl_seconds,
    )
    return mcp
