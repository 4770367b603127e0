"""
Domain exceptions raised by the service layer.

Services raise these instead of HTTPException so they can be exercised
without a request context. The application factory registers a single
handler that maps them to HTTP responses.
"""

from fastapi import status


class DomainError(Exception):
    """Base class for domain-level failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    """Exception raised when a referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str):
        super().__init__(f"{resource.capitalize()} not found")
        self.resource = resource


class ForbiddenError(DomainError):
    """Exception raised when an existing actor fails a role or ownership check."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(DomainError):
    """Exception raised when a write violates a uniqueness constraint."""

    status_code = status.HTTP_409_CONFLICT
