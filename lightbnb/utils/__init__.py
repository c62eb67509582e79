"""
Utility modules for LightBnB.
"""

from lightbnb.utils.exceptions import (
    LightBnBError,
    DatabaseError,
    DatabaseUnavailableError,
    ConstraintViolationError,
    QueryExecutionError,
    NotFoundError,
    ValidationError,
    UnauthorizedError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from lightbnb.utils.money import to_minor_units

__all__ = [
    "LightBnBError",
    "DatabaseError",
    "DatabaseUnavailableError",
    "ConstraintViolationError",
    "QueryExecutionError",
    "NotFoundError",
    "ValidationError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "to_minor_units",
]
