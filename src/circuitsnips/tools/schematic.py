"""Schematic tools - 9 tools."""

from __future__ import annotations

import json
from typing import Optional

from fastmcp import FastMCP

from circuitsnips.config import CircuitSnipsConfig
from circuitsnips.logging_config import get_logger
from circuitsnips.models.errors import ValidationError
from circuitsnips.models.types import PaperSize, WrapOptions
from circuitsnips.schematic import sanitize, snippet, validator, wrapper
from circuitsnips.schematic.classify import as_snippet, classify
from circuitsnips.schematic.clipboard import sanitize_clipboard_data, validate_clipboard_data
from circuitsnips.schematic.metadata import extract_metadata as _extract_metadata
from circuitsnips.schematic.serving import prepare_for_viewer, serve_schematic
from circuitsnips.utils import sexp_parser
from circuitsnips.utils.validation import validate_document_size, validate_uuid

logger = get_logger("tools.schematic")


def _paper(value: Optional[str]) -> Optional[PaperSize]:
    if not value:
        return None
    try:
        return PaperSize(value)
    except ValueError:
        choices = ", ".join(size.value for size in PaperSize)
        raise ValidationError(
            f"Unknown paper size: '{value}'. Expected one of: {choices}"
        ) from None


def register_tools(mcp: FastMCP, config: CircuitSnipsConfig) -> None:
    """Register schematic tools on the MCP server."""

    def _checked(text: str) -> str:
        return validate_document_size(
            text, config.max_document_bytes, config.max_document_lines,
        )

    @mcp.tool()
    def check_balance(text: str) -> str:
        """Check parenthesis balance of S-expression text.

        Parentheses inside quoted strings are ignored.

        Args:
            text: Schematic or snippet text.

        Returns:
            JSON with final balance, first unmatched ')' index, and the start
            of an unterminated string if any.
        """
        result = sexp_parser.check_balance(_checked(text))
        return json.dumps({
            "status": "success",
            "is_balanced": result.is_balanced,
            **result.model_dump(),
        }, indent=2)

    @mcp.tool()
    def classify_schematic(text: str) -> str:
        """Tell whether text is a full schematic file or a clipboard snippet.

        Args:
            text: Schematic or snippet text.

        Returns:
            JSON with form "full" or "snippet".
        """
        form = classify(_checked(text))
        return json.dumps({"status": "success", "form": form.value})

    @mcp.tool()
    def validate_schematic(text: str, title: str = "Validation") -> str:
        """Validate schematic or snippet text.

        Snippets are wrapped into a full file before metadata extraction;
        the wrapped text is returned as normalized_text.

        Args:
            text: Schematic or snippet text.
            title: Title used when a snippet has to be wrapped.

        Returns:
            JSON verdict with valid flag, errors, warnings and metadata.
        """
        verdict = validator.validate_schematic(_checked(text), WrapOptions(title=title))
        logger.info(
            "Validated %s document: %d errors, %d warnings",
            verdict.form.value if verdict.form else "unknown",
            len(verdict.errors),
            len(verdict.warnings),
        )
        return json.dumps(
            {"status": "success", **verdict.model_dump(mode="json")}, indent=2,
        )

    @mcp.tool()
    def wrap_snippet(
        text: str,
        title: str = "Untitled",
        uuid: str = "",
        paper_size: str = "A4",
    ) -> str:
        """Wrap a clipboard snippet into a complete schematic file.

        Args:
            text: Snippet text. Full files are rejected.
            title: Title block title.
            uuid: Root uuid. A fresh one is generated when empty.
            paper_size: Sheet size, e.g. A4, A3, USLetter.

        Returns:
            JSON with the wrapped schematic text.
        """
        parsed = as_snippet(_checked(text))
        if parsed is None:
            return json.dumps({
                "status": "error",
                "message": "Text is already a full schematic file; only snippets can be wrapped.",
            })
        options = WrapOptions(
            title=title,
            uuid=validate_uuid(uuid) if uuid else None,
            paper_size=_paper(paper_size) or PaperSize.A4,
        )
        return json.dumps({
            "status": "success",
            "schematic": wrapper.wrap_snippet(parsed, options),
        }, indent=2)

    @mcp.tool()
    def remove_hierarchical_sheets(text: str) -> str:
        """Remove sheet and sheet_instances forms from schematic text.

        Args:
            text: Schematic text.

        Returns:
            JSON with the cleaned text and how many characters were removed.
        """
        text = _checked(text)
        cleaned = sanitize.remove_hierarchical_sheets(text)
        return json.dumps({
            "status": "success",
            "schematic": cleaned,
            "removed_chars": len(text) - len(cleaned),
        }, indent=2)

    @mcp.tool()
    def extract_metadata(text: str) -> str:
        """Extract components, nets, wire count and bounds from a schematic.

        Snippets are wrapped first. Unparseable text yields empty metadata.

        Args:
            text: Schematic or snippet text.

        Returns:
            JSON with the parsed metadata.
        """
        full_file = wrapper.ensure_full_file(_checked(text))
        metadata = _extract_metadata(sanitize.remove_hierarchical_sheets(full_file))
        return json.dumps(
            {"status": "success", **metadata.model_dump(mode="json")}, indent=2,
        )

    @mcp.tool()
    def extract_snippet(text: str) -> str:
        """Strip the file-level header from a full schematic, leaving pastable content.

        Args:
            text: Full schematic file text.

        Returns:
            JSON with the snippet text.
        """
        return json.dumps({
            "status": "success",
            "snippet": snippet.extract_snippet(_checked(text)),
        }, indent=2)

    @mcp.tool()
    def prepare_schematic(
        text: str,
        title: str,
        circuit_id: str,
        paper_size: str = "",
        filename: str = "",
    ) -> str:
        """Prepare stored circuit text for a schematic viewer.

        Picks a sheet size that fits the content unless one is given, wraps
        snippets, and removes hierarchical sheet references.

        Args:
            text: Stored schematic or snippet text.
            title: Circuit title.
            circuit_id: Circuit identifier, used as the uuid of wrapped snippets.
            paper_size: Optional sheet size override.
            filename: Served filename. Defaults to the circuit id.

        Returns:
            JSON with the viewer-ready text and response headers.
        """
        prepared = prepare_for_viewer(_checked(text), title, circuit_id, _paper(paper_size))
        served = serve_schematic(
            prepared, filename or circuit_id, cache_seconds=config.serve_cache_seconds,
        )
        logger.info("Prepared circuit %s as %s", circuit_id, served.filename)
        return json.dumps({
            "status": "success",
            "filename": served.filename,
            "headers": served.headers,
            "schematic": served.body,
        }, indent=2)

    @mcp.tool()
    def validate_clipboard(text: str, sanitize_output: bool = False) -> str:
        """Check snippet text before it is copied to the clipboard.

        Args:
            text: Snippet text.
            sanitize_output: Return a cleaned copy when there are warnings but no errors.

        Returns:
            JSON with valid flag, errors, warnings and element counts.
        """
        check = validate_clipboard_data(_checked(text))
        result = {"status": "success", **check.model_dump()}
        if sanitize_output and check.valid and check.warnings:
            result["sanitized"] = sanitize_clipboard_data(text)
        return json.dumps(result, indent=2)
