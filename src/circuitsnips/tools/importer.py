"""Import tools - 2 tools."""

from __future__ import annotations

import json
from typing import Any

from fastmcp import FastMCP

from circuitsnips.config import CircuitSnipsConfig
from circuitsnips.importer.plan import prepare_import as _prepare_import
from circuitsnips.importer.records import validate_import_batch as _validate_batch
from circuitsnips.logging_config import get_logger
from circuitsnips.models.errors import ImportBatchError
from circuitsnips.utils.validation import validate_document_size

logger = get_logger("tools.importer")


def register_tools(mcp: FastMCP, config: CircuitSnipsConfig) -> None:
    """Register batch import tools on the MCP server."""

    @mcp.tool()
    def validate_import_batch(records: list[dict[str, Any]]) -> str:
        """Check a batch of scraped circuit records before import.

        Args:
            records: Up to 100 records with repository fields, raw_sexpr and
                a subcircuit object (name, description, tags).

        Returns:
            JSON with per-record results and valid/invalid counts.
        """
        try:
            checks = _validate_batch(records)
        except ImportBatchError as e:
            return json.dumps({"status": "error", "message": str(e), **e.details})

        results = [
            {"index": index, **check.model_dump()}
            for index, check in enumerate(checks)
        ]
        valid = sum(1 for check in checks if check.valid)
        logger.info("Checked import batch: %d valid, %d invalid", valid, len(checks) - valid)
        return json.dumps({
            "status": "success",
            "total": len(checks),
            "valid": valid,
            "invalid": len(checks) - valid,
            "results": results,
        }, indent=2)

    @mcp.tool()
    def prepare_import(record: dict[str, Any]) -> str:
        """Validate one scraped record and build its stored form.

        The schematic gets GitHub attribution in its title block; slug, tags
        and category are derived from the subcircuit and its components.

        Args:
            record: A single scraper record.

        Returns:
            JSON import plan, or an error listing what failed.
        """
        raw = record.get("raw_sexpr") if isinstance(record, dict) else None
        if isinstance(raw, str):
            validate_document_size(raw, config.max_document_bytes, config.max_document_lines)

        plan = _prepare_import(record)
        if not plan.valid:
            return json.dumps({
                "status": "error",
                "errors": plan.errors,
                "warnings": plan.warnings,
            }, indent=2)
        return json.dumps({
            "status": "success",
            **plan.model_dump(mode="json", exclude={"valid", "errors", "metadata"}),
        }, indent=2)
