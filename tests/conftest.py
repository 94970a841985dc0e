"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from circuitsnips.config import CircuitSnipsConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def full_schematic() -> str:
    """Two-resistor divider; R2 has no footprint."""
    return (FIXTURES_DIR / "divider.kicad_sch").read_text(encoding="utf-8")


@pytest.fixture
def snippet_text() -> str:
    """Clipboard copy of one decoupling capacitor with a wire and label."""
    return (FIXTURES_DIR / "decoupling.snippet").read_text(encoding="utf-8")


@pytest.fixture
def hierarchical_schematic() -> str:
    """Root sheet with one sheet symbol whose name contains parens."""
    return (FIXTURES_DIR / "hierarchical.kicad_sch").read_text(encoding="utf-8")


@pytest.fixture
def test_config(tmp_path: Path) -> CircuitSnipsConfig:
    return CircuitSnipsConfig(
        log_level="WARNING",
        log_file=tmp_path / "server.log",
        max_document_bytes=64 * 1024,
        max_document_lines=2000,
    )


@pytest.fixture
def import_record(snippet_text: str) -> dict[str, Any]:
    return {
        "source_file_id": "gh-1234",
        "repo_owner": "octo",
        "repo_name": "power-boards",
        "repo_url": "https://github.com/octo/power-boards",
        "repo_license": "mit",
        "file_path": "hw/decoupling.kicad_sch",
        "raw_sexpr": snippet_text,
        "component_count": 1,
        "classification_score": 8.5,
        "subcircuit": {
            "name": "MCU Decoupling Capacitor",
            "description": "Single 100nF capacitor next to the supply pin.",
            "useCase": "Any digital IC",
            "tags": ["Decoupling", "power"],
        },
    }
