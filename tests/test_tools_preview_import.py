"""Tests for preview and import tools and the MCP resources."""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastmcp import FastMCP

from circuitsnips.config import CircuitSnipsConfig
from circuitsnips.models.errors import (
    DocumentTooLargeError,
    PreviewNotFoundError,
    ValidationError,
)
from circuitsnips.resources.definitions import register_resources
from circuitsnips.tools import importer, preview
from circuitsnips.utils.preview_store import PreviewStore


@pytest.fixture
def store() -> PreviewStore:
    return PreviewStore(ttl_seconds=60)


@pytest.fixture
def mcp_preview(store: PreviewStore, test_config: CircuitSnipsConfig):
    mcp = FastMCP("test")
    preview.register_tools(mcp, store, test_config)
    register_resources(mcp, store, test_config)
    return mcp


@pytest.fixture
def mcp_import(test_config: CircuitSnipsConfig):
    mcp = FastMCP("test")
    importer.register_tools(mcp, test_config)
    return mcp


def _resource_fn(mcp: FastMCP, name: str):
    manager = mcp._resource_manager
    for entry in [*manager._resources.values(), *manager._templates.values()]:
        if entry.name == name:
            return entry.fn
    raise KeyError(name)


class TestPreviewTools:
    def test_create_and_get(self, mcp_preview: FastMCP, snippet_text: str):
        created = json.loads(mcp_preview._tool_manager._tools["create_preview"].fn(snippet_text))
        assert created["status"] == "success"
        preview_id = created["preview_id"]
        assert created["uri"] == f"circuitsnips://preview/{preview_id}"
        assert created["expires_in"] == 3600

        fetched = json.loads(mcp_preview._tool_manager._tools["get_preview"].fn(preview_id))
        assert fetched["status"] == "success"
        assert fetched["filename"] == f"{preview_id}.kicad_sch"
        assert fetched["headers"]["Cache-Control"] == "no-cache, no-store, must-revalidate"
        assert '(title "Circuit Preview")' in fetched["schematic"]

    def test_sheets_stripped_on_read(self, mcp_preview: FastMCP, hierarchical_schematic: str):
        created = json.loads(
            mcp_preview._tool_manager._tools["create_preview"].fn(hierarchical_schematic)
        )
        fetched = json.loads(
            mcp_preview._tool_manager._tools["get_preview"].fn(created["preview_id"])
        )
        assert "(sheet" not in fetched["schematic"]

    def test_unknown_preview(self, mcp_preview: FastMCP):
        result = json.loads(mcp_preview._tool_manager._tools["get_preview"].fn("preview-1-ab"))
        assert result["status"] == "error"
        assert "preview-1-ab" in result["message"]

    def test_malformed_id(self, mcp_preview: FastMCP):
        with pytest.raises(ValidationError):
            mcp_preview._tool_manager._tools["get_preview"].fn("../etc/passwd")

    def test_size_limit(self, mcp_preview: FastMCP):
        with pytest.raises(DocumentTooLargeError):
            mcp_preview._tool_manager._tools["create_preview"].fn("(a)" * 30000)


class TestResources:
    def test_formats(self, mcp_preview: FastMCP):
        formats = json.loads(_resource_fn(mcp_preview, "formats_resource")())
        assert formats["min_format_version"] == 20211014
        assert formats["wrapper_format_version"] == 20231120
        assert "wire" in formats["snippet_elements"]
        assert formats["auto_sheet_sizes"]["A4"] == {"width": 270, "height": 184}
        assert formats["limits"]["max_document_bytes"] == 64 * 1024

    def test_preview(self, mcp_preview: FastMCP, store: PreviewStore, snippet_text: str):
        preview_id = store.put(snippet_text)
        text = _resource_fn(mcp_preview, "preview_resource")(preview_id)
        assert text.startswith("(kicad_sch")

    def test_preview_missing(self, mcp_preview: FastMCP):
        with pytest.raises(PreviewNotFoundError):
            _resource_fn(mcp_preview, "preview_resource")("preview-1-ab")


class TestImportTools:
    def test_validate_batch(self, mcp_import: FastMCP, import_record: dict[str, Any]):
        result = json.loads(mcp_import._tool_manager._tools["validate_import_batch"].fn(
            [import_record, {"source_file_id": "x"}]
        ))
        assert result["status"] == "success"
        assert (result["total"], result["valid"], result["invalid"]) == (2, 1, 1)
        assert result["results"][1]["index"] == 1
        assert result["results"][1]["valid"] is False

    def test_validate_empty_batch(self, mcp_import: FastMCP):
        result = json.loads(mcp_import._tool_manager._tools["validate_import_batch"].fn([]))
        assert result["status"] == "error"
        assert result["message"] == "Records array is empty"

    def test_validate_oversized_batch(self, mcp_import: FastMCP, import_record: dict[str, Any]):
        result = json.loads(
            mcp_import._tool_manager._tools["validate_import_batch"].fn([import_record] * 101)
        )
        assert result["status"] == "error"
        assert result["batch_size"] == 101

    def test_prepare(self, mcp_import: FastMCP, import_record: dict[str, Any]):
        result = json.loads(
            mcp_import._tool_manager._tools["prepare_import"].fn(import_record)
        )
        assert result["status"] == "success"
        assert result["slug"] == "mcu-decoupling-capacitor"
        assert result["schematic"].startswith("(kicad_sch")
        assert "metadata" not in result

    def test_prepare_invalid(self, mcp_import: FastMCP, import_record: dict[str, Any]):
        import_record["classification_score"] = 42
        result = json.loads(
            mcp_import._tool_manager._tools["prepare_import"].fn(import_record)
        )
        assert result["status"] == "error"
        assert "classification_score must be between 0 and 10" in result["errors"]

    def test_prepare_too_large(self, mcp_import: FastMCP, import_record: dict[str, Any]):
        import_record["raw_sexpr"] = "(a)" * 30000
        with pytest.raises(DocumentTooLargeError):
            mcp_import._tool_manager._tools["prepare_import"].fn(import_record)
