"""
Error handling service for consistent error response formatting and logging.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from lightbnb.utils.exceptions import LightBnBError, DatabaseError, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Turns LightBnB errors into structured JSON responses.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            error_code: Error code identifier
            message: Human-readable error message
            details: Optional list of detailed error information
            request_id: Optional request identifier for tracking

        Returns:
            Formatted error response dictionary
        """
        response = {
            "error": {
                "code": error_code,
                "message": message,
                "timestamp": ErrorHandlerService._get_current_timestamp(),
            }
        }

        if details:
            response["error"]["details"] = details

        if request_id:
            response["error"]["request_id"] = request_id

        return response

    @staticmethod
    def handle_lightbnb_error(
        exception: LightBnBError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        request_id = ErrorHandlerService._generate_request_id()
        path = request.url.path if request else None

        if isinstance(exception, DatabaseError):
            logger.error(f"Database Error [{request_id}] {path}: {exception.error_code} - {exception.detail}")
        else:
            logger.warning(f"API Exception [{request_id}] {path}: {exception.error_code} - {exception.detail}")

        details = exception.field_errors if isinstance(exception, ValidationError) else None
        error_response = ErrorHandlerService.format_error_response(
            error_code=exception.error_code,
            message=exception.detail,
            details=details,
            request_id=request_id
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle request validation errors with per-field details."""
        request_id = ErrorHandlerService._generate_request_id()

        details = []
        for error in exception.errors():
            field = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
            details.append({
                "field": field,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            })

        logger.warning(f"Validation Error [{request_id}]: {len(details)} field error(s)")

        error_response = ErrorHandlerService.format_error_response(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            details=details,
            request_id=request_id
        )

        return JSONResponse(status_code=422, content=error_response)

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        return datetime.now(timezone.utc).isoformat()
