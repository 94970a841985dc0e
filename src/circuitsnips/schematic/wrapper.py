"""Wrap clipboard snippets into standalone .kicad_sch files."""

from __future__ import annotations

import uuid as _uuid
from datetime import datetime, timezone

from circuitsnips.logging_config import get_logger
from circuitsnips.models.types import WrapOptions
from circuitsnips.schematic.classify import Snippet, as_snippet
from circuitsnips.utils.sexp_parser import escape_string

logger = get_logger("schematic.wrapper")

# KiCad 8.0 schematic format
WRAPPER_FORMAT_VERSION = 20231120
GENERATOR = "CircuitSnips"
GENERATOR_VERSION = "1.0"


def wrap_snippet(snippet: Snippet, options: WrapOptions | None = None) -> str:
    """Wrap a clipboard snippet in a complete kicad_sch envelope.

    The envelope carries version, generator, generator version, uuid, paper
    size and a title block, followed by the snippet text verbatim. A balanced
    snippet gives a balanced file. Wrapping is one-way and meant to run once.

    Args:
        snippet: Snippet obtained from ``as_snippet``.
        options: Title, uuid and paper size for the envelope.

    Returns:
        The complete schematic text.

    Raises:
        TypeError: If ``snippet`` is not a ``Snippet``.
    """
    if not isinstance(snippet, Snippet):
        raise TypeError(
            f"wrap_snippet expects a Snippet, got {type(snippet).__name__}; "
            "use as_snippet() to classify the text first"
        )
    if options is None:
        options = WrapOptions()

    root_uuid = options.uuid or str(_uuid.uuid4())
    today = datetime.now(timezone.utc).date().isoformat()
    logger.debug("Wrapping %d-char snippet as %s", len(snippet.text), root_uuid)

    return f"""(kicad_sch
  (version {WRAPPER_FORMAT_VERSION})
  (generator {escape_string(GENERATOR)})
  (generator_version {escape_string(GENERATOR_VERSION)})

  (uuid {escape_string(root_uuid)})

  (paper {escape_string(options.paper_size.value)})

  (title_block
    (title {escape_string(options.title)})
    (date "{today}")
    (rev "1")
    (company {escape_string(GENERATOR)})
  )

{snippet.text}
)"""


def ensure_full_file(text: str, options: WrapOptions | None = None) -> str:
    """Wrap ``text`` if it is a snippet, return it unchanged otherwise."""
    snippet = as_snippet(text)
    if snippet is None:
        return text
    return wrap_snippet(snippet, options)
