"""
Domain-specific exceptions for the PDL composer.

The expression core absorbs degraded input instead of rejecting it; these
exceptions cover the few caller-contract violations and the outer surfaces
(catalog loading, API snapshots). They are mapped to HTTP status codes in the
API layer.
"""

from typing import Any


class ComposerError(Exception):
    """Base exception for all composer domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ComposerError):
    """
    Raised when input data fails validation.

    Examples:
    - Malformed field catalog file
    - Snapshot exceeding depth or node limits

    HTTP Status: 400 Bad Request
    """

    pass


class NotFoundError(ComposerError):
    """
    Raised when a requested resource does not exist.

    Examples:
    - Sibling index out of range
    - Field catalog file missing

    HTTP Status: 404 Not Found
    """

    pass


# HTTP Status Code Mapping
ERROR_STATUS_MAP = {
    ValidationError: 400,
    NotFoundError: 404,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
