"""Custom exception hierarchy for CircuitSnips."""

from __future__ import annotations


class CircuitSnipsError(Exception):
    """Base exception for all CircuitSnips errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(CircuitSnipsError):
    """Input validation failed."""


class DocumentTooLargeError(ValidationError):
    """Schematic text exceeds the configured size or line limit."""


class PreviewError(CircuitSnipsError):
    """Error storing or retrieving a preview schematic."""


class PreviewNotFoundError(PreviewError):
    """Preview id is unknown or the preview has expired."""


class ImportBatchError(CircuitSnipsError):
    """A batch of import records cannot be processed as a whole."""
