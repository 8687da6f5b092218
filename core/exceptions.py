"""
Centralized exception hierarchy for domain-specific errors.

This module provides custom exception classes that represent specific
error conditions in the application, enabling better error handling and
client-side error recovery.
"""

from collections.abc import Iterable, Mapping
from typing import Any

# Location prefixes FastAPI adds in front of the field name
_REQUEST_LOCATIONS = ("body", "query", "path")


def format_validation_errors(
    errors: Iterable[Mapping[str, Any]],
) -> list[dict[str, str]]:
    """Convert pydantic error entries into ``{field, message}`` pairs.

    Only the first message per field is kept.
    """
    formatted: list[dict[str, str]] = []
    seen: set[str] = set()
    for error in errors:
        loc = [
            str(part)
            for part in error.get("loc", ())
            if part not in _REQUEST_LOCATIONS
        ]
        # Item errors such as coordinates.1 are reported on the list itself;
        # a malformed JSON body only carries a character offset
        if error.get("type") == "json_invalid" or not loc:
            field = "body"
        else:
            field = loc[0]
        if field in seen:
            continue
        seen.add(field)
        formatted.append(
            {"field": field, "message": error.get("msg", "Invalid value")},
        )
    return formatted


class PlacesError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(PlacesError):
    """Exception raised when data validation fails.

    ``errors`` holds one ``{"field": ..., "message": ...}`` entry per
    violated field.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.errors = errors or []

    @classmethod
    def from_pydantic(
        cls,
        errors: Iterable[Mapping[str, Any]],
        message: str = "Invalid data",
    ) -> "ValidationError":
        """Build from ``pydantic.ValidationError.errors()`` output."""
        return cls(message, errors=format_validation_errors(errors))


class ResourceNotFoundError(PlacesError):
    """Exception raised when a requested resource is not found."""


class DuplicateResourceError(PlacesError):
    """Exception raised when attempting to create a duplicate resource."""


class StoreError(PlacesError):
    """Exception raised when the document store fails."""


PlacesException = PlacesError
ValidationException = ValidationError
ResourceNotFoundException = ResourceNotFoundError
DuplicateResourceException = DuplicateResourceError
StoreException = StoreError
