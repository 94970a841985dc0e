"""Metadata extraction: components, nets, wires and extents."""

from __future__ import annotations

from typing import Any

from circuitsnips.logging_config import get_logger
from circuitsnips.models.types import (
    BoundingBox,
    Component,
    FootprintSummary,
    Net,
    NetKind,
    ParsedMetadata,
    Position,
    UniqueComponent,
)
from circuitsnips.utils.sexp_parser import (
    ROOT_KEYWORD,
    find_root,
    iter_child_blocks,
    iter_top_level_blocks,
    parse_sexp,
)

logger = get_logger("schematic.metadata")

LABEL_KINDS = {kind.value: kind for kind in NetKind}


def read_format_version(text: str) -> int | None:
    """Read the integer from the document's ``(version N)`` form.

    Looks at the root's direct children, or at the top-level forms of a
    headerless document. No full parse is needed.

    Returns:
        The version number, or ``None`` when the form is missing or its value
        is not an integer.
    """
    root = find_root(text)
    blocks = iter_child_blocks(text, root[0]) if root else iter_top_level_blocks(text)
    for keyword, start, end in blocks:
        if keyword != "version":
            continue
        raw = text[start + len("(version"):end].strip().strip('"')
        try:
            return int(raw)
        except ValueError:
            return None
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _head(node: Any) -> str | None:
    if isinstance(node, list) and node and isinstance(node[0], str):
        return node[0]
    return None


def _child(node: list[Any], tag: str) -> list[Any] | None:
    for item in node[1:]:
        if _head(item) == tag:
            return item
    return None


def _child_value(node: list[Any], tag: str, default: str = "") -> str:
    found = _child(node, tag)
    if found is not None and len(found) > 1:
        return str(found[1])
    return default


def _properties(node: list[Any]) -> dict[str, str]:
    props: dict[str, str] = {}
    for item in node[1:]:
        if _head(item) == "property" and len(item) >= 3:
            props.setdefault(str(item[1]), str(item[2]))
    return props


def _position(node: list[Any]) -> Position | None:
    at = _child(node, "at")
    if at is None or len(at) < 3 or not (_is_number(at[1]) and _is_number(at[2])):
        return None
    angle = at[3] if len(at) > 3 and _is_number(at[3]) else 0.0
    return Position(x=at[1], y=at[2], angle=angle)


class _Collector:
    """Single walk over the parsed tree accumulating everything at once."""

    def __init__(self) -> None:
        self.components: list[Component] = []
        self.nets: list[Net] = []
        self.net_names: set[str] = set()
        self.label_count = 0
        self.wire_count = 0
        self.points: list[tuple[float, float]] = []

    def visit(self, node: Any) -> None:
        tag = _head(node)
        if tag is None:
            return
        # Library geometry is relative to each symbol's origin
        if tag == "lib_symbols":
            return

        if tag == "symbol" and _child(node, "lib_id") is not None:
            self._add_component(node)
        elif tag in LABEL_KINDS:
            self._add_label(node, LABEL_KINDS[tag])
        elif tag == "wire":
            self.wire_count += 1
        elif tag in ("at", "xy") and len(node) >= 3:
            if _is_number(node[1]) and _is_number(node[2]):
                self.points.append((float(node[1]), float(node[2])))

        for child in node[1:]:
            if isinstance(child, list):
                self.visit(child)

    def _add_component(self, node: list[Any]) -> None:
        props = _properties(node)
        lib_id = _child_value(node, "lib_id")
        if "Reference" not in props or "Value" not in props:
            logger.debug("Skipping %s instance without Reference/Value", lib_id)
            return
        self.components.append(Component(
            reference=props["Reference"],
            value=props["Value"],
            footprint=props.get("Footprint", ""),
            lib_id=lib_id,
            uuid=_child_value(node, "uuid"),
            position=_position(node),
            properties=props,
        ))

    def _add_label(self, node: list[Any], kind: NetKind) -> None:
        if len(node) < 2 or isinstance(node[1], list):
            return
        name = str(node[1])
        if not name:
            return
        self.label_count += 1
        if name not in self.net_names:
            self.net_names.add(name)
            self.nets.append(Net(name=name, kind=kind))


def _bounding_box(points: list[tuple[float, float]]) -> BoundingBox | None:
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return BoundingBox(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))


def _unique_components(components: list[Component]) -> list[UniqueComponent]:
    by_lib: dict[str, UniqueComponent] = {}
    for comp in components:
        entry = by_lib.setdefault(comp.lib_id, UniqueComponent(lib_id=comp.lib_id, count=0))
        entry.count += 1
        if comp.value not in entry.values:
            entry.values.append(comp.value)
    return list(by_lib.values())


def _footprint_summary(components: list[Component]) -> FootprintSummary:
    types: list[str] = []
    assigned = 0
    for comp in components:
        if comp.footprint:
            assigned += 1
            if comp.footprint not in types:
                types.append(comp.footprint)
    return FootprintSummary(
        assigned=assigned,
        unassigned=len(components) - assigned,
        types=types,
    )


def extract_metadata(text: str) -> ParsedMetadata:
    """Extract components, nets, wire count and extents from schematic text.

    Best effort: malformed symbol instances are skipped and text that cannot
    be parsed at all yields empty metadata. Never raises.

    Args:
        text: Full-file text (snippets are accepted and read form by form).

    Returns:
        A freshly built ``ParsedMetadata``.
    """
    try:
        forms = parse_sexp(text)
    except Exception as e:
        logger.warning("Cannot parse schematic for metadata extraction: %s", e)
        return ParsedMetadata()

    if len(forms) == 1 and _head(forms[0]) == ROOT_KEYWORD:
        body = forms[0][1:]
    else:
        body = forms

    format_version = "unknown"
    generator = ""
    collector = _Collector()
    for node in body:
        tag = _head(node)
        if tag == "version" and format_version == "unknown" and len(node) > 1:
            format_version = str(node[1])
        elif tag == "generator" and not generator and len(node) > 1:
            generator = str(node[1])
        collector.visit(node)

    components = collector.components
    logger.debug(
        "Extracted %d components, %d nets, %d wires",
        len(components), len(collector.nets), collector.wire_count,
    )
    return ParsedMetadata(
        components=components,
        nets=collector.nets,
        wire_count=collector.wire_count,
        label_count=collector.label_count,
        bounding_box=_bounding_box(collector.points),
        format_version=format_version,
        generator=generator,
        unique_components=_unique_components(components),
        footprints=_footprint_summary(components),
    )
