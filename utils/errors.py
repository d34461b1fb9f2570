"""
Error kinds raised by the domain layer and translated to HTTP responses
by the handlers in ``api.middleware``.
"""

from __future__ import annotations

from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for errors that map onto a specific HTTP status."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, object]:
        return {"error": self.message}


class ValidationError(AppError):
    """Malformed, missing or out-of-range input."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, object]:
        return {"error": self.message, "errors": self.errors}


class DuplicateResourceError(AppError):
    status_code = 400
    code = "DUPLICATE_RESOURCE"


class AuthenticationError(AppError):
    """Bad credentials, or a missing / invalid / expired bearer token."""

    status_code = 401
    code = "AUTHENTICATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class InternalError(AppError):
    """Catch-all for store/driver failures; the cause is logged, never returned."""

    status_code = 500
    code = "INTERNAL_ERROR"
