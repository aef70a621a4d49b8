from __future__ import annotations


class CrowdApiError(RuntimeError):
    """Base class for errors reported to API callers as ``{"error": message}``."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidRequestError(CrowdApiError):
    """Raised when request parameters are malformed."""

    status_code = 400
    message = "Invalid request"


class DestinationNotFoundError(CrowdApiError):
    """Raised when a destination does not exist or has no capacity configured."""

    status_code = 404
    message = "Destination not found or no capacity set"


class StoreError(CrowdApiError):
    """Raised when the data store cannot answer a query."""

    status_code = 500
    message = "Failed to query the data store"
