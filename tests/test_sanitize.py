"""Tests for hierarchical sheet removal."""

from __future__ import annotations

import re

from circuitsnips.models.types import DocumentForm
from circuitsnips.schematic.classify import classify
from circuitsnips.schematic.sanitize import remove_hierarchical_sheets
from circuitsnips.utils.sexp_parser import check_balance

SHEET_TOKEN = re.compile(r"\(sheet\b")


class TestRemoveHierarchicalSheets:
    def test_removes_sheet_and_instances(self, hierarchical_schematic: str):
        result = remove_hierarchical_sheets(hierarchical_schematic)
        assert not SHEET_TOKEN.search(result)
        assert "(sheet_instances" not in result
        assert "Sheetfile" not in result
        assert check_balance(result).is_balanced

    def test_keeps_other_content(self, hierarchical_schematic: str):
        result = remove_hierarchical_sheets(hierarchical_schematic)
        assert "(wire (pts (xy 120 85) (xy 150 85))" in result
        assert "(lib_symbols)" in result
        assert '(paper "A3")' in result
        assert classify(result) is DocumentForm.FULL_FILE

    def test_scenario_inline_sheet(self):
        text = (
            '(kicad_sch (version 20231120) (sheet (at 0 0) (size 10 10) '
            '(uuid "y") (pin "A" (at 0 0))) )'
        )
        result = remove_hierarchical_sheets(text)
        assert "(sheet" not in result
        assert check_balance(result).is_balanced
        assert result.startswith("(kicad_sch (version 20231120)")

    def test_arbitrary_depth(self):
        inner = "(x " * 40 + ")" * 40
        text = f"(kicad_sch (version 20231120)\n  (sheet (at 0 0) {inner})\n  (wire (pts))\n)"
        result = remove_hierarchical_sheets(text)
        assert result == "(kicad_sch (version 20231120)\n  (wire (pts))\n)"

    def test_paren_in_string_does_not_end_block(self):
        text = '(kicad_sch\n  (sheet (property "Sheetname" "a) (b") (at 1 2))\n  (junction (at 3 4))\n)'
        result = remove_hierarchical_sheets(text)
        assert result == "(kicad_sch\n  (junction (at 3 4))\n)"

    def test_sheet_keyword_inside_string_ignored(self):
        text = '(kicad_sch\n  (text "(sheet here)" (at 0 0))\n)'
        assert remove_hierarchical_sheets(text) == text

    def test_similar_keywords_kept(self):
        text = "(kicad_sch\n  (sheet_pin (at 0 0))\n  (sheets 2)\n)"
        assert remove_hierarchical_sheets(text) == text

    def test_snippet_stays_snippet(self):
        text = '(wire (pts (xy 0 0) (xy 1 0)))\n(sheet (at 0 0) (size 5 5))\n(label "N" (at 1 0 0))'
        result = remove_hierarchical_sheets(text)
        assert classify(result) is DocumentForm.SNIPPET
        assert result == '(wire (pts (xy 0 0) (xy 1 0)))\n(label "N" (at 1 0 0))'

    def test_no_sheets_unchanged(self, full_schematic: str):
        text = full_schematic.replace("(sheet_instances", "(other_instances")
        assert remove_hierarchical_sheets(text) == text

    def test_unclosed_sheet_left_in_place(self):
        text = "(kicad_sch (sheet (at 0 0)"
        assert remove_hierarchical_sheets(text) == text

    def test_idempotent(self, hierarchical_schematic: str):
        once = remove_hierarchical_sheets(hierarchical_schematic)
        assert remove_hierarchical_sheets(once) == once
