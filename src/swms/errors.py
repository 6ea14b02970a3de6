"""Error types raised by services and translated to HTTP responses by the API layer."""

from __future__ import annotations


class SWMSError(Exception):
    """Base class for all application errors."""


class InvalidInputError(SWMSError, ValueError):
    """Malformed or out-of-range input, rejected before any computation or write."""


class NotFoundError(SWMSError, LookupError):
    """A referenced bin, complaint, task or user does not exist."""


class UnauthorizedError(SWMSError):
    """Missing or invalid credential."""


class ForbiddenError(SWMSError):
    """Valid credential without the role required for the operation."""


class StorageUnavailableError(SWMSError):
    """The database is not configured or could not be reached."""
