"""ProWriter error types."""

from __future__ import annotations

from typing import Any


class ProWriterError(Exception):
    """Base exception for ProWriter."""

    pass


class NotFoundError(ProWriterError):
    """A referenced project, artifact or revision does not exist."""

    pass


class ValidationError(ProWriterError):
    """A payload failed the schema check for its declared type.

    ``errors`` holds the structured error list reported by pydantic, if any.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ConflictError(ProWriterError):
    """A concurrent write to the same artifact was detected by the store.

    The transaction has been rolled back; the caller may retry the whole upsert.
    """

    pass
