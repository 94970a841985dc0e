"""Tests for sheet size selection and paper rewriting."""

from __future__ import annotations

from circuitsnips.models.types import BoundingBox, PaperSize
from circuitsnips.schematic.paper import replace_paper_size, select_sheet_size
from circuitsnips.utils.sexp_parser import check_balance


def _box(width: float, height: float) -> BoundingBox:
    return BoundingBox(min_x=10, min_y=20, max_x=10 + width, max_y=20 + height)


class TestSelectSheetSize:
    def test_no_bounds_defaults_to_a4(self):
        result = select_sheet_size(None)
        assert result.size is PaperSize.A4
        assert not result.is_oversized

    def test_small_content(self):
        result = select_sheet_size(_box(25, 31))
        assert result.size is PaperSize.A4
        assert (result.width, result.height) == (25, 31)

    def test_exact_a4_area(self):
        assert select_sheet_size(_box(270, 184)).size is PaperSize.A4

    def test_a3(self):
        assert select_sheet_size(_box(300, 200)).size is PaperSize.A3

    def test_tall_content_needs_a3(self):
        assert select_sheet_size(_box(100, 250)).size is PaperSize.A3

    def test_a2(self):
        assert select_sheet_size(_box(500, 300)).size is PaperSize.A2

    def test_oversized(self):
        result = select_sheet_size(_box(600, 100))
        assert result.size is PaperSize.A2
        assert result.is_oversized


class TestReplacePaperSize:
    def test_replaces_existing(self, full_schematic: str):
        result = replace_paper_size(full_schematic, PaperSize.A3)
        assert '(paper "A3")' in result
        assert '(paper "A4")' not in result
        assert check_balance(result).is_balanced

    def test_orientation_dropped(self):
        text = '(kicad_sch (version 20231120) (paper "A4" portrait) (wire (pts)))'
        assert replace_paper_size(text, PaperSize.US_LETTER) == (
            '(kicad_sch (version 20231120) (paper "USLetter") (wire (pts)))'
        )

    def test_inserted_after_header(self):
        text = '(kicad_sch\n  (version 20231120)\n  (uuid "u")\n  (wire (pts))\n)'
        assert replace_paper_size(text, PaperSize.A2) == (
            '(kicad_sch\n  (version 20231120)\n  (uuid "u")\n\n  (paper "A2")\n  (wire (pts))\n)'
        )

    def test_nested_paper_untouched(self):
        text = '(kicad_sch (version 20231120) (text_box (paper "A4")))'
        result = replace_paper_size(text, PaperSize.A3)
        assert '(text_box (paper "A4"))' in result
        assert '(version 20231120)\n\n  (paper "A3")' in result

    def test_snippet_unchanged(self, snippet_text: str):
        assert replace_paper_size(snippet_text, PaperSize.A3) == snippet_text
