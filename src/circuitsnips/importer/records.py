"""Validation of batch import records coming from the repository scraper."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from circuitsnips.models.errors import ImportBatchError

MAX_BATCH_SIZE = 100
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 2000
MAX_TAGS = 10
MAX_TAG_LENGTH = 30
MIN_RAW_LENGTH = 100
RECOMMENDED_SCORE = 7

REQUIRED_FIELDS = (
    "source_file_id",
    "repo_owner",
    "repo_name",
    "repo_url",
    "repo_license",
    "file_path",
    "raw_sexpr",
)
STRING_FIELDS = (
    "source_file_id",
    "repo_owner",
    "repo_name",
    "repo_url",
    "repo_license",
    "file_path",
    "raw_sexpr",
)
NUMBER_FIELDS = ("component_count", "classification_score")

SUPPORTED_LICENSES = (
    "MIT",
    "Apache-2.0",
    "GPL-3.0",
    "BSD-2-Clause",
    "CC-BY-4.0",
    "CC-BY-SA-4.0",
    "CERN-OHL-S-2.0",
    "TAPR-OHL-1.0",
)

LICENSE_VARIATIONS = {
    "apache-2": "Apache-2.0",
    "apache": "Apache-2.0",
    "gpl-3": "GPL-3.0",
    "gpl3": "GPL-3.0",
    "bsd-2": "BSD-2-Clause",
    "bsd2": "BSD-2-Clause",
    "cc-by": "CC-BY-4.0",
    "cc-by-sa": "CC-BY-SA-4.0",
    "cern-ohl-s": "CERN-OHL-S-2.0",
    "cern-ohl": "CERN-OHL-S-2.0",
    "tapr": "TAPR-OHL-1.0",
}


class Subcircuit(BaseModel):
    name: str
    description: str
    components: Any = None
    use_case: Optional[str] = Field(default=None, alias="useCase")
    notes: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class ImportRecord(BaseModel):
    """A record that passed ``validate_import_record``."""

    source_file_id: str
    repo_owner: str
    repo_name: str
    repo_url: str
    repo_license: str
    file_path: str
    raw_sexpr: str
    component_count: float
    classification_score: float
    subcircuit: Subcircuit


class RecordCheck(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def _check_subcircuit(sc: Any, errors: list[str], warnings: list[str]) -> None:
    if not isinstance(sc, dict):
        errors.append("subcircuit must be an object")
        return

    for key in ("name", "description"):
        if not sc.get(key):
            errors.append(f"Missing subcircuit.{key}")

    name = sc.get("name")
    if not isinstance(name, str):
        errors.append("subcircuit.name must be a string")
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"subcircuit.name must be {MAX_NAME_LENGTH} characters or less")

    description = sc.get("description")
    if not isinstance(description, str):
        errors.append("subcircuit.description must be a string")
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        warnings.append(
            f"subcircuit.description is very long (>{MAX_DESCRIPTION_LENGTH} chars), "
            "will be truncated"
        )

    tags = sc.get("tags")
    if tags is None:
        errors.append("Missing subcircuit.tags")
        return
    if not isinstance(tags, list):
        errors.append("subcircuit.tags must be an array")
        return
    if not tags:
        errors.append("subcircuit.tags must have at least one tag")
    if len(tags) > MAX_TAGS:
        warnings.append(f"subcircuit.tags has more than {MAX_TAGS} tags, extras will be ignored")
    for index, tag in enumerate(tags):
        if not isinstance(tag, str):
            errors.append(f"subcircuit.tags[{index}] must be a string")
        elif len(tag) > MAX_TAG_LENGTH:
            errors.append(f"subcircuit.tags[{index}] exceeds {MAX_TAG_LENGTH} characters")
        elif not tag.strip():
            errors.append(f"subcircuit.tags[{index}] is empty")


def validate_import_record(record: Any) -> RecordCheck:
    """Check one scraper record, collecting every problem found.

    Checks required fields, field types and lengths, the repository URL, tag
    formatting, the classification score range and the rough shape of the
    schematic text. The schematic itself is validated by ``prepare_import``.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(record, dict):
        return RecordCheck(valid=False, errors=["Record must be an object"])

    for key in REQUIRED_FIELDS:
        if not record.get(key):
            errors.append(f"Missing {key}")
    for key in NUMBER_FIELDS:
        if record.get(key) is None:
            errors.append(f"Missing {key}")

    for key in STRING_FIELDS:
        if key in record and not isinstance(record[key], str):
            errors.append(f"{key} must be a string")
    repo_url = record.get("repo_url")
    if isinstance(repo_url, str) and repo_url and not _is_valid_url(repo_url):
        errors.append("repo_url must be a valid URL")
    for key in NUMBER_FIELDS:
        if key in record and record[key] is not None and not _is_number(record[key]):
            errors.append(f"{key} must be a number")

    if "subcircuit" not in record or record["subcircuit"] is None:
        errors.append("Missing subcircuit object")
    else:
        _check_subcircuit(record["subcircuit"], errors, warnings)

    raw = record.get("raw_sexpr")
    if isinstance(raw, str) and raw:
        trimmed = raw.strip()
        if not trimmed.startswith("("):
            errors.append("raw_sexpr must start with opening parenthesis")
        if not trimmed.endswith(")"):
            errors.append("raw_sexpr must end with closing parenthesis")
        if len(trimmed) < MIN_RAW_LENGTH:
            warnings.append("raw_sexpr seems very short, may not be a complete schematic")

    score = record.get("classification_score")
    if _is_number(score):
        if score < 0 or score > 10:
            errors.append("classification_score must be between 0 and 10")
        if score < RECOMMENDED_SCORE:
            warnings.append(
                f"classification_score is below recommended threshold of {RECOMMENDED_SCORE}"
            )

    return RecordCheck(valid=not errors, errors=errors, warnings=warnings)


def validate_import_batch(records: Any) -> list[RecordCheck]:
    """Check a whole batch, one result per record in input order.

    Raises:
        ImportBatchError: If ``records`` is not a list, is empty, or holds
            more than 100 records.
    """
    if not isinstance(records, list):
        raise ImportBatchError("Records must be an array")
    if not records:
        raise ImportBatchError("Records array is empty")
    if len(records) > MAX_BATCH_SIZE:
        raise ImportBatchError(
            f"Batch size exceeds maximum of {MAX_BATCH_SIZE} records",
            {"batch_size": len(records)},
        )
    return [validate_import_record(record) for record in records]


def normalize_license(license: str) -> str | None:
    """Map a license string to a supported identifier, or ``None``."""
    normalized = license.strip().lower()
    for supported in SUPPORTED_LICENSES:
        if supported.lower() == normalized:
            return supported
    return LICENSE_VARIATIONS.get(normalized)
