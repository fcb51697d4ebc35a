# app/core/errors.py
"""
Domain errors raised by the service layer.

Routers never build error responses by hand: they let these propagate and the
handlers registered in ``app.main`` turn them into the
``{"success": false, "message": ...}`` envelope.
"""
from typing import List, Optional


class AppError(Exception):
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[dict]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 422
    default_message = "Validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Not authenticated"


class PermissionDeniedError(AppError):
    status_code = 403
    default_message = "Admin access required"


class StorageUnavailable(AppError):
    status_code = 503
    default_message = "Storage is temporarily unavailable. Please try again."
