from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps a field name to its message when the failure is field-level.
    """

    def __init__(self, message: str, *, errors: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class DataSourceError(DomainError):
    """Raised when an upstream store could not be read or written.

    Distinct from an empty result: "no rows" is never reported with this error.
    """

    def __init__(self, message: str, *, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class ConcurrentUpdateError(DomainError):
    """Raised when an optimistic version check fails on save."""
