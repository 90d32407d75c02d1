"""
Error handling service for consistent error response formatting and logging.
Every failure leaves the API as {"error": ..., "code": ..., "request_id": ...}.
"""

from typing import Dict, Any, Optional, Sequence
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            error_code: Error code identifier
            message: Human-readable error message
            request_id: Optional request identifier for tracking

        Returns:
            Formatted error response dictionary
        """
        response = {"error": message, "code": error_code}
        if request_id:
            response["request_id"] = request_id
        return response

    @staticmethod
    def get_request_id(request: Optional[Request] = None) -> str:
        """Request id assigned by the request middleware, or a fresh one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return str(uuid.uuid4())[:8]

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Domain errors raised by services and dependencies."""
        request_id = ErrorHandlerService.get_request_id(request)

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                error_code=exception.error_code or "API_ERROR",
                message=exception.detail,
                request_id=request_id
            ),
            headers=exception.headers
        )

    @staticmethod
    def describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
        """
        Flatten validation errors into one message, e.g.
        "price: Input should be greater than 0".
        """
        messages = []
        for error in errors:
            loc = [str(part) for part in error.get("loc", ())]
            if loc and loc[0] in _LOCATION_PREFIXES:
                loc = loc[1:]
            field = ".".join(loc)
            messages.append(f"{field}: {error['msg']}" if field else error["msg"])
        return "; ".join(messages) or "Invalid request"

    @staticmethod
    def handle_validation_error(
        errors: Sequence[Dict[str, Any]],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Malformed request bodies, paths or queries map to 400."""
        request_id = ErrorHandlerService.get_request_id(request)
        message = ErrorHandlerService.describe_validation_errors(errors)

        logger.warning(
            f"Validation Error [{request_id}]: {message}",
            extra={
                "error_count": len(errors),
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response(
                error_code="VALIDATION_ERROR",
                message=message,
                request_id=request_id
            )
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Integrity violations map to 409; any other storage failure is an
        opaque 500.
        """
        request_id = ErrorHandlerService.get_request_id(request)

        if isinstance(exception, IntegrityError):
            error_code = "INTEGRITY_ERROR"
            message = ErrorHandlerService._extract_constraint_info(exception)
            status_code = 409
        else:
            error_code = "DATABASE_ERROR"
            message = INTERNAL_ERROR_MESSAGE
            status_code = 500

        logger.error(
            f"Database Error [{request_id}]: {error_code} - {exception}",
            extra={
                "error_code": error_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(
                error_code=error_code,
                message=message,
                request_id=request_id
            )
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Framework errors such as unknown routes or wrong methods."""
        request_id = ErrorHandlerService.get_request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                error_code=f"HTTP_{exception.status_code}",
                message=str(exception.detail),
                request_id=request_id
            ),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Anything unanticipated. The client only sees a generic message; the
        exception and traceback go to the log under the request id.
        """
        request_id = ErrorHandlerService.get_request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(
                error_code="INTERNAL_SERVER_ERROR",
                message=INTERNAL_ERROR_MESSAGE,
                request_id=request_id
            )
        )

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> str:
        """Map a driver integrity message to a client-safe description."""
        error_msg = str(exception.orig).lower()

        if "unique" in error_msg:
            return "Duplicate value for unique field"
        if "foreign key" in error_msg:
            return "Referenced record does not exist"
        if "not null" in error_msg:
            return "Required field cannot be empty"
        if "check constraint" in error_msg:
            return "Value does not meet validation requirements"
        return "Data integrity constraint violation"
