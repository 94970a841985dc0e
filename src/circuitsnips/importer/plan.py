"""Turn a validated scraper record into the data a circuit is stored with."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from circuitsnips.importer.records import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TAGS,
    ImportRecord,
    normalize_license,
    validate_import_record,
)
from circuitsnips.logging_config import get_logger
from circuitsnips.models.types import ParsedMetadata
from circuitsnips.schematic.attribution import add_github_attribution
from circuitsnips.schematic.validator import validate_schematic
from circuitsnips.utils.tagging import generate_slug, suggest_category, suggest_tags

logger = get_logger("importer")


class ImportPlan(BaseModel):
    """Everything needed to store one imported circuit.

    When ``valid`` is False only ``errors`` and ``warnings`` are meaningful.
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    source_file_id: str = ""
    title: str = ""
    slug: str = ""
    description: str = ""
    license: str = ""
    tags: list[str] = Field(default_factory=list)
    category: str = "General"
    component_count: int = 0
    wire_count: int = 0
    net_count: int = 0
    schematic: str = Field(default="", description="Attributed full schematic file")
    metadata: Optional[ParsedMetadata] = None


def _merge_tags(own: list[str], suggested: list[str]) -> list[str]:
    merged: dict[str, None] = {}
    for tag in own[:MAX_TAGS]:
        merged[tag.strip().lower()] = None
    for tag in suggested:
        if len(merged) >= MAX_TAGS:
            break
        merged[tag] = None
    return list(merged)


def prepare_import(raw: dict[str, Any]) -> ImportPlan:
    """Check a scraper record and build its stored form.

    The record is checked first, then its schematic text. On success the
    schematic gets GitHub attribution in its title block and the plan carries
    slug, tags, category and counts.
    """
    check = validate_import_record(raw)
    if not check.valid:
        return ImportPlan(valid=False, errors=check.errors, warnings=check.warnings)

    record = ImportRecord.model_validate(raw)
    warnings = list(check.warnings)

    verdict = validate_schematic(record.raw_sexpr)
    warnings.extend(verdict.warnings)
    if not verdict.valid:
        errors = [f"Invalid KiCad file: {error}" for error in verdict.errors]
        logger.info("Rejected import %s: %s", record.source_file_id, errors[0])
        return ImportPlan(valid=False, errors=errors, warnings=warnings)

    license = normalize_license(record.repo_license)
    if license is None:
        license = record.repo_license
        warnings.append(f"Unrecognised license '{record.repo_license}', stored as given")

    metadata = verdict.metadata or ParsedMetadata()
    schematic = add_github_attribution(
        record.raw_sexpr,
        repo_owner=record.repo_owner,
        repo_name=record.repo_name,
        repo_url=record.repo_url,
        file_path=record.file_path,
        license=license,
        score=record.classification_score,
    )

    subcircuit = record.subcircuit
    logger.info("Prepared import %s as '%s'", record.source_file_id, subcircuit.name)
    return ImportPlan(
        valid=True,
        warnings=warnings,
        source_file_id=record.source_file_id,
        title=subcircuit.name,
        slug=generate_slug(subcircuit.name),
        description=subcircuit.description[:MAX_DESCRIPTION_LENGTH],
        license=license,
        tags=_merge_tags(subcircuit.tags, suggest_tags(metadata)),
        category=suggest_category(metadata),
        component_count=len(metadata.components) or int(record.component_count),
        wire_count=metadata.wire_count,
        net_count=len(metadata.nets),
        schematic=schematic,
        metadata=metadata,
    )
