"""Pydantic models for schematic processing inputs and results."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


# --- Enums ---

class DocumentForm(str, Enum):
    SNIPPET = "snippet"
    FULL_FILE = "full"


class PaperSize(str, Enum):
    A5 = "A5"
    A4 = "A4"
    A3 = "A3"
    A2 = "A2"
    A1 = "A1"
    A0 = "A0"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    US_LETTER = "USLetter"
    US_LEGAL = "USLegal"
    US_LEDGER = "USLedger"


class NetKind(str, Enum):
    LABEL = "label"
    GLOBAL_LABEL = "global_label"
    HIERARCHICAL_LABEL = "hierarchical_label"


# --- Options ---

class WrapOptions(BaseModel):
    title: str = Field(default="Untitled", description="Title block title")
    uuid: Optional[str] = Field(
        default=None,
        description="Root uuid. A fresh uuid4 is minted when absent",
    )
    paper_size: PaperSize = Field(default=PaperSize.A4, description="Sheet size")


# --- Structure ---

class BalanceResult(BaseModel):
    balance: int = Field(description="Final paren depth, -1 when a ')' had no match")
    first_imbalance_index: Optional[int] = Field(
        default=None,
        description="Index of the first ')' that drove the depth negative",
    )
    unterminated_string_index: Optional[int] = Field(
        default=None,
        description="Index of the opening quote of a string literal left open",
    )

    @property
    def is_balanced(self) -> bool:
        return (
            self.balance == 0
            and self.first_imbalance_index is None
            and self.unterminated_string_index is None
        )


# --- Position / Geometry ---

class Position(BaseModel):
    x: float = Field(description="X coordinate in mm")
    y: float = Field(description="Y coordinate in mm")
    angle: float = Field(default=0.0, description="Rotation in degrees")


class BoundingBox(BaseModel):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


# --- Metadata ---

class Component(BaseModel):
    reference: str = Field(description="Reference designator (e.g. R1, U3)")
    value: str = Field(description="Component value")
    footprint: str = Field(default="", description="Footprint library:name")
    lib_id: str = Field(description="Library symbol identifier")
    uuid: str = ""
    position: Optional[Position] = None
    properties: dict[str, str] = Field(default_factory=dict)


class Net(BaseModel):
    name: str
    kind: NetKind


class UniqueComponent(BaseModel):
    lib_id: str
    count: int
    values: list[str] = Field(default_factory=list)


class FootprintSummary(BaseModel):
    assigned: int = 0
    unassigned: int = 0
    types: list[str] = Field(default_factory=list)


class ParsedMetadata(BaseModel):
    components: list[Component] = Field(default_factory=list)
    nets: list[Net] = Field(default_factory=list)
    wire_count: int = 0
    label_count: int = 0
    bounding_box: Optional[BoundingBox] = None
    format_version: str = "unknown"
    generator: str = ""
    unique_components: list[UniqueComponent] = Field(default_factory=list)
    footprints: FootprintSummary = Field(default_factory=FootprintSummary)


# --- Verdicts ---

class ValidationVerdict(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    metadata: Optional[ParsedMetadata] = None
    form: Optional[DocumentForm] = None
    normalized_text: Optional[str] = Field(
        default=None,
        description="Wrapped document when the input was a clipboard snippet",
    )

    @model_validator(mode="after")
    def _valid_matches_errors(self) -> "ValidationVerdict":
        if self.valid != (not self.errors):
            raise ValueError("valid must be True exactly when there are no errors")
        return self

    @classmethod
    def build(
        cls,
        errors: list[str],
        warnings: list[str],
        **kwargs: Any,
    ) -> "ValidationVerdict":
        return cls(valid=not errors, errors=errors, warnings=warnings, **kwargs)


class ClipboardStats(BaseModel):
    size: int = 0
    line_count: int = 0
    lib_symbol_count: int = 0
    symbol_count: int = 0
    wire_count: int = 0
    label_count: int = 0


class ClipboardCheck(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    stats: ClipboardStats = Field(default_factory=ClipboardStats)


# --- Paper / Serving ---

class SheetSizeResult(BaseModel):
    size: PaperSize
    is_oversized: bool = False
    width: float = 0.0
    height: float = 0.0


class ServedSchematic(BaseModel):
    body: str
    filename: str
    content_type: str = "text/plain; charset=utf-8"
    content_disposition: str
    cache_control: str

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": self.content_disposition,
            "Cache-Control": self.cache_control,
        }
