"""Single-pass schematic validation producing a ``ValidationVerdict``."""

from __future__ import annotations

from circuitsnips.logging_config import get_logger
from circuitsnips.models.types import (
    DocumentForm,
    ParsedMetadata,
    ValidationVerdict,
    WrapOptions,
)
from circuitsnips.schematic.classify import SNIPPET_ELEMENTS, Snippet, classify
from circuitsnips.schematic.heuristics import detect_corruption
from circuitsnips.schematic.metadata import extract_metadata, read_format_version
from circuitsnips.schematic.wrapper import wrap_snippet
from circuitsnips.utils.sexp_parser import (
    check_balance,
    find_root,
    iter_child_blocks,
    iter_top_level_blocks,
)

logger = get_logger("schematic.validator")

# KiCad 6.0 schematic format epoch
MIN_FORMAT_VERSION = 20211014

EMPTY_INPUT = "Empty input"
SNIPPET_NOTICE = "Clipboard snippet detected - will be wrapped for preview"


def _balance_errors(text: str) -> list[str]:
    result = check_balance(text)
    if result.first_imbalance_index is not None:
        return [
            "Unbalanced parentheses - extra closing parenthesis at position "
            f"{result.first_imbalance_index}"
        ]
    if result.unterminated_string_index is not None:
        return [
            "Unbalanced parentheses - unterminated string literal starting at position "
            f"{result.unterminated_string_index}"
        ]
    if result.balance != 0:
        return [
            f"Unbalanced parentheses - missing closing parenthesis ({result.balance} unclosed)"
        ]
    return []


def _version_errors(version: int | None) -> list[str]:
    if version is None:
        return ["Cannot determine KiCad format version"]
    if version < MIN_FORMAT_VERSION:
        return [
            f"Unsupported version: {version} (KiCad 5 or earlier format). "
            f"Only KiCad 6+ (version >= {MIN_FORMAT_VERSION}) is supported."
        ]
    return []


def _snippet_warnings(text: str) -> list[str]:
    first = next(iter_top_level_blocks(text), None)
    if first is None:
        return ["Snippet contains no S-expression forms"]
    if first[0] not in SNIPPET_ELEMENTS:
        return [f"Snippet starts with unexpected element '({first[0]}'"]
    return []


def _content_warnings(text: str, metadata: ParsedMetadata) -> list[str]:
    warnings: list[str] = []
    components = metadata.components

    if not components:
        warnings.append("No components found in schematic")

    if metadata.footprints.unassigned > 0:
        warnings.append(
            f"{metadata.footprints.unassigned} component(s) missing footprint assignments"
        )

    if metadata.wire_count == 0 and len(components) > 1:
        warnings.append("No wires found - components may not be connected")

    if components:
        library = _library_state(text)
        if library is None:
            warnings.append(
                "Schematic has symbol instances but no lib_symbols definitions. "
                "KiCad may not be able to display symbols correctly."
            )
        elif not library:
            warnings.append(
                "lib_symbols section is empty but symbols are present. "
                "This may cause rendering issues."
            )

    return warnings


def _library_state(text: str) -> bool | None:
    """None without a lib_symbols section, else whether it defines anything."""
    root = find_root(text)
    blocks = iter_child_blocks(text, root[0]) if root else iter_top_level_blocks(text)
    for keyword, start, _end in blocks:
        if keyword == "lib_symbols":
            return any(True for _ in iter_child_blocks(text, start))
    return None


def validate_schematic(text: str, options: WrapOptions | None = None) -> ValidationVerdict:
    """Validate schematic text and extract its metadata in one pass.

    Only structural problems (empty input, unbalanced parentheses, missing or
    pre-KiCad-6 format version) make the verdict invalid. Everything else is
    reported as a warning. Metadata is attached whenever the balance check
    passed.

    Args:
        text: Raw upload content, snippet or full file.
        options: Envelope options used when the input is a snippet.

    Returns:
        The verdict. For snippets, ``normalized_text`` holds the wrapped file.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not text or not text.strip():
        return ValidationVerdict.build([EMPTY_INPUT], warnings)

    errors.extend(_balance_errors(text))
    if errors:
        logger.debug("Rejected unbalanced input: %s", errors[0])
        return ValidationVerdict.build(errors, warnings)

    form = classify(text)
    working = text
    normalized = None
    if form is DocumentForm.SNIPPET:
        warnings.append(SNIPPET_NOTICE)
        warnings.extend(_snippet_warnings(text))
        working = normalized = wrap_snippet(
            Snippet(text=text), options or WrapOptions(title="Validation"),
        )

    errors.extend(_version_errors(read_format_version(working)))

    metadata = extract_metadata(working)
    warnings.extend(_content_warnings(working, metadata))
    warnings.extend(detect_corruption(text))

    verdict = ValidationVerdict.build(
        errors,
        warnings,
        metadata=metadata,
        form=form,
        normalized_text=normalized,
    )
    logger.debug(
        "Validated %s: valid=%s errors=%d warnings=%d",
        form.value, verdict.valid, len(errors), len(warnings),
    )
    return verdict
