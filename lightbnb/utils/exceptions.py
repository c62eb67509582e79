"""
Custom exception classes for LightBnB.
Each error carries the HTTP status code and error code used when it reaches the API.
"""

from typing import Any, Dict, Optional, List


class LightBnBError(Exception):
    """Base exception class."""

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(detail)
        self.detail = detail
        self.headers = headers


# Database errors
class DatabaseError(LightBnBError):
    """A statement could not be executed."""


class DatabaseUnavailableError(DatabaseError):
    """The database could not be reached or dropped the connection."""

    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"

    def __init__(self, detail: str = "Database temporarily unavailable"):
        super().__init__(detail)


class ConstraintViolationError(DatabaseError):
    """An insert conflicted with a table constraint, e.g. a duplicate email."""

    status_code = 409
    error_code = "CONFLICT"

    def __init__(self, detail: str, constraint: Optional[str] = None):
        super().__init__(detail)
        self.constraint = constraint


class QueryExecutionError(DatabaseError):
    """Any other failure reported by the database."""

    error_code = "QUERY_FAILED"


# Request level errors
class NotFoundError(LightBnBError):
    """Resource not found exception."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail += f" with ID: {resource_id}"
        super().__init__(detail)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(LightBnBError):
    """Validation error exception."""

    status_code = 422
    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(detail)
        self.field_errors = field_errors or []


class UnauthorizedError(LightBnBError):
    """Authentication required exception."""

    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid or expired JWT token exception."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)
