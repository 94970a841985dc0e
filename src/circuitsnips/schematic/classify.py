"""Snippet / full-file detection."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from circuitsnips.models.types import DocumentForm
from circuitsnips.utils.sexp_parser import ROOT_KEYWORD

ROOT_TOKEN = "(" + ROOT_KEYWORD

# Top-level forms KiCad puts on the clipboard
SNIPPET_ELEMENTS = frozenset({
    "lib_symbols",
    "symbol",
    "wire",
    "bus",
    "bus_entry",
    "polyline",
    "rectangle",
    "circle",
    "arc",
    "text",
    "text_box",
    "label",
    "global_label",
    "hierarchical_label",
    "netclass_flag",
    "junction",
    "no_connect",
    "image",
    "sheet",
    "sheet_instances",
    "symbol_instances",
})


def classify(text: str) -> DocumentForm:
    """Classify text as a clipboard snippet or a complete schematic file.

    Only the leading non-whitespace content is looked at: text opening with
    the ``(kicad_sch`` root token is a full file, anything else a snippet.
    A corrupt document that merely starts with the root token is still a
    full file here and fails later checks instead.
    """
    stripped = text.lstrip()
    if stripped.startswith(ROOT_TOKEN):
        rest = stripped[len(ROOT_TOKEN):]
        if not rest or rest[0] in " \t\r\n)":
            return DocumentForm.FULL_FILE
    return DocumentForm.SNIPPET


def is_snippet(text: str) -> bool:
    return classify(text) is DocumentForm.SNIPPET


class Snippet(BaseModel):
    """Schematic text known to lack the ``kicad_sch`` root form.

    Construction fails for full files, so only snippets can ever be wrapped.
    """

    model_config = {"frozen": True}

    text: str

    @field_validator("text")
    @classmethod
    def _must_be_snippet(cls, value: str) -> str:
        if classify(value) is not DocumentForm.SNIPPET:
            raise ValueError("text is already a full kicad_sch file")
        return value


def as_snippet(text: str) -> Snippet | None:
    """Return a ``Snippet`` for snippet text, ``None`` for a full file."""
    if classify(text) is DocumentForm.SNIPPET:
        return Snippet(text=text)
    return None
