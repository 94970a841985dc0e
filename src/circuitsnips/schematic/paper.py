"""Sheet size selection and paper form rewriting."""

from __future__ import annotations

from typing import NamedTuple, Optional

from circuitsnips.models.types import BoundingBox, PaperSize, SheetSizeResult
from circuitsnips.utils.sexp_parser import escape_string, find_root, iter_child_blocks


class SheetArea(NamedTuple):
    width: float
    height: float


# Usable drawing area in mm, measured from KiCad sheets with their margins
SHEET_SIZES: dict[PaperSize, SheetArea] = {
    PaperSize.A4: SheetArea(270, 184),
    PaperSize.A3: SheetArea(394, 272),
    PaperSize.A2: SheetArea(570, 396),
}

HEADER_KEYWORDS = ("version", "generator", "generator_version", "uuid")


def select_sheet_size(bounding_box: Optional[BoundingBox]) -> SheetSizeResult:
    """Pick the smallest of A4, A3, A2 that holds the bounding box.

    Content larger than A2 still gets A2, flagged as oversized. A document
    without coordinates gets A4.
    """
    if bounding_box is None:
        return SheetSizeResult(size=PaperSize.A4)

    width = bounding_box.width
    height = bounding_box.height
    for size, area in SHEET_SIZES.items():
        if width <= area.width and height <= area.height:
            return SheetSizeResult(size=size, width=width, height=height)
    return SheetSizeResult(size=PaperSize.A2, is_oversized=True, width=width, height=height)


def replace_paper_size(text: str, paper_size: PaperSize) -> str:
    """Set the paper size of a full schematic file.

    The root ``(paper ...)`` form is replaced; orientation and custom
    dimensions it carried are dropped. Without one, a paper form is inserted
    after the header forms. Text without a ``kicad_sch`` root is returned
    unchanged.
    """
    root = find_root(text)
    if root is None:
        return text

    paper_form = f"(paper {escape_string(paper_size.value)})"
    insert_at = root[0] + len("(kicad_sch")
    for keyword, start, end in iter_child_blocks(text, root[0]):
        if keyword == "paper":
            return text[:start] + paper_form + text[end + 1:]
        if keyword in HEADER_KEYWORDS:
            insert_at = end + 1
    return text[:insert_at] + "\n\n  " + paper_form + text[insert_at:]
