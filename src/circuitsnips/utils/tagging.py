"""Slug, tag and category suggestions derived from schematic metadata."""

from __future__ import annotations

import re

from circuitsnips.models.types import ParsedMetadata

MAX_SLUG_LENGTH = 60
MAX_SUGGESTED_TAGS = 8

# (substring of the lowercased lib_id, tag)
LIBRARY_TAGS = [
    ("opamp", "op-amp"),
    ("amplifier", "op-amp"),
    ("regulator", "voltage-regulator"),
    ("sensor", "sensor"),
    ("connector", "connector"),
    ("mcu", "microcontroller"),
    ("microcontroller", "microcontroller"),
    ("relay", "relay"),
    ("transistor", "transistor"),
    ("diode", "diode"),
]

# (substring of the lowercased value, tag)
VALUE_TAGS = [
    ("555", "timer"),
    ("lm358", "op-amp"),
    ("tl072", "op-amp"),
    ("7805", "voltage-regulator"),
    ("lm317", "voltage-regulator"),
    ("esp32", "microcontroller"),
    ("arduino", "microcontroller"),
]

REFERENCE_TAGS = [
    ("u", "ic"),
    ("r", "resistor"),
    ("c", "capacitor"),
    ("l", "inductor"),
    ("d", "diode"),
    ("q", "transistor"),
]

VOLTAGE_TAGS = [
    (("3.3v", "3v3"), "3.3v"),
    (("5v",), "5v"),
    (("12v",), "12v"),
]

# Checked in order, first match wins
CATEGORY_RULES = [
    ("Power Supply", lambda h: _mentions(h, "regulator", "7805", "lm317")),
    ("Analog", lambda h: _mentions(h, "opamp", "amplifier", "lm358")),
    ("Microcontroller", lambda h: _mentions(h, "mcu", "esp", "arduino")),
    ("Sensors", lambda h: _mentions(h, "sensor", "temperature", "pressure")),
    ("Control", lambda h: "relay" in h or ("transistor" in h and "load" in h)),
    ("Communication", lambda h: _mentions(h, "uart", "spi", "i2c")),
    ("Display/LED", lambda h: _mentions(h, "led", "display")),
]


def _mentions(haystack: str, *needles: str) -> bool:
    return any(needle in haystack for needle in needles)


def generate_slug(title: str) -> str:
    """URL-friendly slug: lowercase, hyphen-separated, at most 60 chars."""
    slug = title.lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug[:MAX_SLUG_LENGTH]


def suggest_tags(metadata: ParsedMetadata) -> list[str]:
    """Suggest up to eight tags from component libraries, values and references."""
    tags: dict[str, None] = {}

    for component in metadata.components:
        lib = component.lib_id.lower()
        value = component.value.lower()
        ref = component.reference.lower()

        for needle, tag in LIBRARY_TAGS:
            if needle in lib:
                tags[tag] = None
        for needle, tag in VALUE_TAGS:
            if needle in value:
                tags[tag] = None
        for prefix, tag in REFERENCE_TAGS:
            if ref.startswith(prefix):
                tags[tag] = None

    all_values = " ".join(c.value for c in metadata.components).lower()
    for needles, tag in VOLTAGE_TAGS:
        if any(needle in all_values for needle in needles):
            tags[tag] = None

    return list(tags)[:MAX_SUGGESTED_TAGS]


def suggest_category(metadata: ParsedMetadata) -> str:
    """Estimate a browse category from component libraries and values."""
    haystack = " ".join(
        f"{c.lib_id} {c.value}" for c in metadata.components
    ).lower()

    for category, matches in CATEGORY_RULES:
        if matches(haystack):
            return category
    return "General"
