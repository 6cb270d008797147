"""
Centralized error handling for the Travel Proxy API.

This module defines the exception taxonomy raised by the proxy services and the
ErrorHandler that turns those failures into the shared error envelope, logging
each one with its request context.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Union
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_proxy.models.responses import ErrorResponse


class ErrorCode(str, Enum):
    """Enumeration of error codes for different failure scenarios."""

    # HTTP status code specific errors
    HTTP_400 = "HTTP_400"
    HTTP_404 = "HTTP_404"
    HTTP_405 = "HTTP_405"
    HTTP_500 = "HTTP_500"

    # Client errors (4xx)
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    UPSTREAM_DATA_ERROR = "UPSTREAM_DATA_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Server errors (5xx)
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    SUBPROCESS_ERROR = "SUBPROCESS_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class TravelProxyError(Exception):
    """Base exception for all failures reported through the error envelope."""

    error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        code: Optional[Union[str, int]] = None,
        setup_instructions: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.details = details
        self.code = code
        self.setup_instructions = setup_instructions
        super().__init__(message)


class ConfigurationMissingError(TravelProxyError):
    """A required upstream credential is not configured."""

    error_code = ErrorCode.CONFIGURATION_MISSING


class UpstreamError(TravelProxyError):
    """Upstream call timed out, failed in transport, or returned a non-success status."""

    error_code = ErrorCode.UPSTREAM_ERROR


class UpstreamDataError(TravelProxyError):
    """Upstream answered, but its payload carries an error object."""

    error_code = ErrorCode.UPSTREAM_DATA_ERROR


class InvalidRequestError(TravelProxyError):
    """Required request fields are missing or invalid."""

    error_code = ErrorCode.VALIDATION_ERROR


class SubprocessError(TravelProxyError):
    """An archiving or build subprocess failed."""

    error_code = ErrorCode.SUBPROCESS_ERROR


class ErrorHandler:
    """
    Centralized error handling class with consistent error response formatting.

    Every failure leaves the API as an ErrorResponse with ``success=False`` and an
    ``error`` message, and is logged once with method, URL and client context.
    """

    # Error code to HTTP status code mapping
    ERROR_STATUS_MAPPING: Dict[ErrorCode, int] = {
        ErrorCode.HTTP_400: 400,
        ErrorCode.HTTP_404: 404,
        ErrorCode.HTTP_405: 405,
        ErrorCode.HTTP_500: 500,

        ErrorCode.CONFIGURATION_MISSING: 400,
        ErrorCode.UPSTREAM_DATA_ERROR: 400,
        ErrorCode.VALIDATION_ERROR: 400,

        ErrorCode.UPSTREAM_ERROR: 500,
        ErrorCode.SUBPROCESS_ERROR: 500,
        ErrorCode.INTERNAL_SERVER_ERROR: 500,
    }

    # Error code to default message mapping
    ERROR_MESSAGES: Dict[ErrorCode, str] = {
        ErrorCode.HTTP_400: "Bad Request",
        ErrorCode.HTTP_404: "Not Found",
        ErrorCode.HTTP_405: "Method Not Allowed",
        ErrorCode.HTTP_500: "Internal Server Error",

        ErrorCode.CONFIGURATION_MISSING: "Upstream API key not configured",
        ErrorCode.UPSTREAM_DATA_ERROR: "Upstream API returned an error",
        ErrorCode.VALIDATION_ERROR: "Request validation failed",
        ErrorCode.UPSTREAM_ERROR: "Failed to fetch data from upstream API",
        ErrorCode.SUBPROCESS_ERROR: "Failed to create download",
        ErrorCode.INTERNAL_SERVER_ERROR: "An unexpected error occurred",
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the ErrorHandler.

        Args:
            logger: Optional logger instance. If not provided, creates a new logger.
        """
        self.logger = logger or logging.getLogger(__name__)

    def get_status_code(self, error_code: ErrorCode) -> int:
        return self.ERROR_STATUS_MAPPING.get(error_code, 500)

    def create_error_response(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[str] = None,
        code: Optional[Union[str, int]] = None,
        setup_instructions: Optional[Dict[str, str]] = None,
    ) -> ErrorResponse:
        """
        Create a standardized error response.

        Args:
            error_code: The error code enum value
            message: Optional custom error message. If not provided, uses default message.
            details: Optional underlying error message
            code: Optional upstream error code
            setup_instructions: Optional remediation steps

        Returns:
            ErrorResponse: Standardized error response object
        """
        return ErrorResponse(
            error=message or self.ERROR_MESSAGES.get(error_code, "Unknown error"),
            error_code=error_code.value,
            code=code,
            details=details,
            setup_instructions=setup_instructions,
            timestamp=datetime.now(timezone.utc)
        )

    def log_error(
        self,
        error_code: ErrorCode,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        additional_context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log error with request context information.

        Args:
            error_code: The error code enum value
            message: Error message
            request: Optional FastAPI request object
            exception: Optional exception that caused the error
            additional_context: Optional additional context information
        """
        context = {
            "error_code": error_code.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if request:
            context.update({
                "method": request.method,
                "url": str(request.url),
                "client_ip": getattr(request.client, 'host', 'unknown') if request.client else 'unknown',
                "user_agent": request.headers.get("user-agent", "unknown"),
            })

        if additional_context:
            context.update(additional_context)

        log_message = f"{error_code.value}: {message}"

        if exception:
            self.logger.error(
                log_message,
                extra={"context": context},
                exc_info=True
            )
        else:
            self.logger.error(
                log_message,
                extra={"context": context}
            )

    def create_json_response(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[str] = None,
        code: Optional[Union[str, int]] = None,
        setup_instructions: Optional[Dict[str, str]] = None,
        status_code: Optional[int] = None,
    ) -> JSONResponse:
        """
        Create a JSON response for an error.

        Optional fields that are not set are left out of the body.
        """
        error_response = self.create_error_response(
            error_code, message, details, code, setup_instructions
        )

        return JSONResponse(
            status_code=status_code or self.get_status_code(error_code),
            content=error_response.model_dump(mode='json', exclude_none=True)
        )

    def handle_proxy_error(
        self,
        error: TravelProxyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Log a TravelProxyError and render it as the error envelope.

        Args:
            error: The raised proxy error
            request: Optional FastAPI request object

        Returns:
            JSONResponse: Error envelope with the status mapped from the error code
        """
        context = {"error_type": type(error).__name__}
        if error.code is not None:
            context["upstream_code"] = error.code
        if error.details:
            context["details"] = error.details

        self.log_error(
            error_code=error.error_code,
            message=error.message,
            request=request,
            exception=error if error.__cause__ else None,
            additional_context=context
        )

        return self.create_json_response(
            error.error_code,
            message=error.message,
            details=error.details,
            code=error.code,
            setup_instructions=error.setup_instructions,
        )


# Global error handler instance
error_handler = ErrorHandler()


def register_exception_handlers(app: FastAPI, handler: ErrorHandler = error_handler) -> None:
    """Install the error envelope handlers on a FastAPI application."""

    @app.exception_handler(TravelProxyError)
    async def travel_proxy_exception_handler(request: Request, exc: TravelProxyError):
        """Handle proxy failures raised by the services."""
        return handler.handle_proxy_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions (FastAPI's HTTPException included) with the error envelope."""
        try:
            error_code = ErrorCode(f"HTTP_{exc.status_code}")
        except ValueError:
            error_code = ErrorCode.HTTP_500 if exc.status_code >= 500 else ErrorCode.HTTP_400

        handler.log_error(error_code, str(exc.detail), request=request)
        return handler.create_json_response(
            error_code,
            message=str(exc.detail),
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors as 400 responses."""
        message = f"Request validation failed: {_summarize_validation_errors(exc.errors())}"
        handler.log_error(ErrorCode.VALIDATION_ERROR, message, request=request)
        return handler.create_json_response(ErrorCode.VALIDATION_ERROR, message=message)

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
        """Handle Pydantic validation errors raised while building responses."""
        message = f"Data validation failed: {_summarize_validation_errors(exc.errors())}"
        handler.log_error(ErrorCode.INTERNAL_SERVER_ERROR, message, request=request, exception=exc)
        return handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR, message=message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions with consistent error response format."""
        handler.log_error(
            ErrorCode.INTERNAL_SERVER_ERROR,
            f"Unhandled Exception: {type(exc).__name__}: {exc}",
            request=request,
            exception=exc,
        )
        return handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR)


def _summarize_validation_errors(errors) -> str:
    """Render validation errors as 'field: message' pairs"""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("query", "body"))
        parts.append(f"{location or 'request'}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)
