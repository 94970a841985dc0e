"""Tests for slug, tag and category suggestions."""

from __future__ import annotations

from circuitsnips.models.types import Component, ParsedMetadata
from circuitsnips.utils.tagging import generate_slug, suggest_category, suggest_tags


def _meta(*parts: tuple[str, str, str]) -> ParsedMetadata:
    return ParsedMetadata(components=[
        Component(reference=ref, value=value, lib_id=lib_id)
        for ref, value, lib_id in parts
    ])


class TestGenerateSlug:
    def test_basic(self):
        assert generate_slug("MCU Decoupling Capacitor!") == "mcu-decoupling-capacitor"

    def test_collapses_separators(self):
        assert generate_slug("  Hello   World -- x ") == "hello-world-x"

    def test_max_length(self):
        assert len(generate_slug("word " * 40)) == 60


class TestSuggestTags:
    def test_op_amp_stage(self):
        meta = _meta(
            ("U1", "LM358", "Amplifier_Operational:LM358"),
            ("R1", "10k", "Device:R"),
            ("C1", "100nF 5V", "Device:C"),
        )
        assert suggest_tags(meta) == ["op-amp", "ic", "resistor", "capacitor", "5v"]

    def test_limit(self):
        meta = _meta(
            ("U1", "NE555", "Timer:NE555"),
            ("U2", "LM317", "Regulator_Linear:LM317"),
            ("U3", "ESP32", "RF_Module:ESP32"),
            ("R1", "1k", "Device:R"),
            ("C1", "1u 3v3", "Device:C"),
            ("L1", "10u 12v", "Device:L"),
            ("D1", "1N4148", "Device:D"),
            ("Q1", "2N3904", "Device:Q_NPN"),
            ("K1", "relay", "Relay:G5V"),
        )
        assert len(suggest_tags(meta)) == 8

    def test_empty(self):
        assert suggest_tags(ParsedMetadata()) == []


class TestSuggestCategory:
    def test_power(self):
        meta = _meta(("U1", "AMS1117-3.3", "Regulator_Linear:AMS1117-3.3"))
        assert suggest_category(meta) == "Power Supply"

    def test_analog(self):
        meta = _meta(("U1", "LM358", "Amplifier_Operational:LM358"))
        assert suggest_category(meta) == "Analog"

    def test_power_checked_first(self):
        meta = _meta(
            ("U1", "LM358", "Amplifier_Operational:LM358"),
            ("U2", "LM7805", "Regulator_Linear:L7805"),
        )
        assert suggest_category(meta) == "Power Supply"

    def test_general(self):
        assert suggest_category(_meta(("R1", "10k", "Device:R"))) == "General"
        assert suggest_category(ParsedMetadata()) == "General"
