"""Short-lived in-memory store for preview schematics."""

from __future__ import annotations

import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass

from circuitsnips.logging_config import get_logger
from circuitsnips.models.errors import PreviewNotFoundError
from circuitsnips.models.types import WrapOptions
from circuitsnips.schematic.wrapper import ensure_full_file

logger = get_logger("preview_store")

PREVIEW_TITLE = "Circuit Preview"


@dataclass(frozen=True)
class PreviewEntry:
    text: str
    created_at: float


class PreviewStore:
    """Keeps preview files for ``ttl_seconds`` under generated ids.

    Safe to share between threads. Past ``max_entries`` the oldest preview
    is evicted.
    """

    def __init__(self, ttl_seconds: float = 3600, max_entries: int = 256) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._entries: OrderedDict[str, PreviewEntry] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @staticmethod
    def new_id() -> str:
        return f"preview-{int(time.time() * 1000)}-{secrets.token_hex(4)}"

    def put(self, text: str) -> str:
        """Store a preview and return its id. Snippets are wrapped first."""
        preview_id = self.new_id()
        full_file = ensure_full_file(
            text, WrapOptions(title=PREVIEW_TITLE, uuid=preview_id),
        )
        with self._lock:
            self._purge_expired(time.monotonic())
            self._entries[preview_id] = PreviewEntry(full_file, time.monotonic())
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted preview %s", evicted)
        logger.info("Stored preview %s (%d chars)", preview_id, len(full_file))
        return preview_id

    def get(self, preview_id: str) -> str:
        """Return a stored preview verbatim.

        Raises:
            PreviewNotFoundError: If the id is unknown or has expired.
        """
        with self._lock:
            entry = self._entries.get(preview_id)
            if entry is not None and time.monotonic() - entry.created_at > self._ttl:
                del self._entries[preview_id]
                entry = None
        if entry is None:
            raise PreviewNotFoundError(
                f"Preview not found or expired: {preview_id}",
                {"preview_id": preview_id},
            )
        return entry.text

    def cleanup(self) -> int:
        """Drop expired previews, returning how many were removed."""
        with self._lock:
            return self._purge_expired(time.monotonic())

    def _purge_expired(self, now: float) -> int:
        expired = [
            key for key, entry in self._entries.items()
            if now - entry.created_at > self._ttl
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)
