"""Tests for clipboard output checks."""

from __future__ import annotations

from circuitsnips.schematic.clipboard import (
    MAX_CLIPBOARD_SIZE,
    format_size,
    sanitize_clipboard_data,
    validate_clipboard_data,
)
from circuitsnips.schematic.heuristics import (
    MAX_REPEAT_BLOCK,
    detect_corruption,
    has_repeated_run,
)


class TestValidateClipboardData:
    def test_clean_snippet(self, snippet_text: str):
        check = validate_clipboard_data(snippet_text)
        assert check.valid
        assert check.errors == []
        assert check.warnings == []
        assert check.stats.symbol_count == 1
        assert check.stats.lib_symbol_count == 1
        assert check.stats.wire_count == 1
        assert check.stats.label_count == 1
        assert check.stats.size == len(snippet_text.encode("utf-8"))

    def test_too_large(self):
        data = "(a)\n" * (MAX_CLIPBOARD_SIZE // 4 + 10000)
        check = validate_clipboard_data(data)
        assert not check.valid
        assert check.errors[0] == "Data too large (1.0 MB). Maximum allowed is 1.0 MB."

    def test_large_warning(self):
        data = "".join(f"(wire (pts (xy {i} 0) (xy {i} 10)))\n" for i in range(16000))
        check = validate_clipboard_data(data)
        assert check.valid
        assert any(w.startswith("Large data size") for w in check.warnings)

    def test_too_many_lines(self):
        check = validate_clipboard_data("\n" * 60000)
        assert not check.valid
        assert any(e.startswith("Too many lines (60001)") for e in check.errors)

    def test_binary(self):
        check = validate_clipboard_data("(wire (pts))\x01")
        assert "Data contains binary or non-printable characters." in check.errors

    def test_unclosed(self):
        check = validate_clipboard_data("(wire (pts)")
        assert check.errors == ["Unbalanced parentheses: 1 unclosed '(' found"]

    def test_extra_close(self):
        check = validate_clipboard_data(")(wire)")
        assert "at position 0" in check.errors[0]

    def test_missing_lib_symbols(self):
        check = validate_clipboard_data('(symbol (lib_id "Device:R") (at 0 0 0))')
        assert check.valid
        assert any("no lib_symbols definitions" in w for w in check.warnings)

    def test_empty_lib_symbols(self):
        check = validate_clipboard_data('(lib_symbols)\n(symbol (lib_id "Device:R"))')
        assert any("lib_symbols section is empty" in w for w in check.warnings)


class TestSanitizeClipboardData:
    def test_collapses_whitespace_and_controls(self):
        assert sanitize_clipboard_data("a" + " " * 10 + "b\n\n\n\nc\x01") == "a  b\n\nc"

    def test_clean_data_unchanged(self):
        data = '(wire (pts (xy 0 0) (xy 1 0)))\n  (label "A" (at 0 0 0))'
        assert sanitize_clipboard_data(data) == data


class TestFormatSize:
    def test_units(self):
        assert format_size(512) == "512 bytes"
        assert format_size(2048) == "2.0 KB"
        assert format_size(3 * 1024 * 1024) == "3.0 MB"


class TestDetectCorruption:
    def test_clean(self, full_schematic: str):
        assert detect_corruption(full_schematic) == []

    def test_short_lines(self):
        warnings = detect_corruption("(a)\n" * 150)
        assert any("characters per line" in w for w in warnings)

    def test_space_run(self):
        assert any("whitespace" in w for w in detect_corruption("(a" + " " * 120 + ")"))

    def test_repeated_content(self):
        chunk = "(wire (pts (xy 1 2) (xy 3 4)) (stroke (width 0) (type default)))"
        warnings = detect_corruption(chunk * 5)
        assert any("repeated content" in w for w in warnings)


class TestHasRepeatedRun:
    CHUNK = "(wire (pts (xy 1 2) (xy 3 4)) (stroke (width 0) (type default)))"

    def test_four_copies(self):
        assert has_repeated_run(self.CHUNK * 4)

    def test_three_copies_not_flagged(self):
        assert not has_repeated_run(self.CHUNK * 3)

    def test_run_after_offset(self):
        text = '(kicad_sch (version 20231120) (title "x")' + self.CHUNK * 4 + ")"
        assert has_repeated_run(text)

    def test_single_character_run(self):
        assert has_repeated_run("(a " + "b" * 300 + ")")

    def test_short_text_not_flagged(self):
        assert not has_repeated_run("(xy 1 2)" * 20)

    def test_block_over_limit_not_flagged(self):
        block = "".join(f"(n{i})" for i in range(MAX_REPEAT_BLOCK))[:MAX_REPEAT_BLOCK + 10]
        assert not has_repeated_run(block * 4)

    def test_distinct_single_line_symbols(self):
        text = "".join(
            f'(symbol (lib_id "Device:R") (at {i} 0 0) (property "Reference" "R{i}"))'
            for i in range(500)
        )
        assert not has_repeated_run(text)

    def test_null_byte(self):
        assert any("null bytes" in w for w in detect_corruption("(a\0)"))

    def test_symbols_without_wires(self):
        text = "\n".join('(symbol (lib_id "Device:R"))' for _ in range(11))
        assert any("11 symbols but no wires" in w for w in detect_corruption(text))
