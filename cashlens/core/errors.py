"""
Error Handling Utilities
Provides sanitized error messages and consistent error responses.
"""

import logging
from enum import Enum
from typing import Optional

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cashlens.core.exceptions import (
    InvalidInsightRequestError,
    ReportFetchError,
    SourceDataUnavailableError,
)

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes for frontend handling."""

    # Source data errors
    SOURCE_DATA_UNAVAILABLE = "source_data_unavailable"
    UNSUPPORTED_PROVIDER = "unsupported_provider"

    # Request errors
    INVALID_REQUEST = "invalid_request"

    # General errors
    INTERNAL_ERROR = "internal_error"


# User-friendly error messages
ERROR_MESSAGES = {
    ErrorCode.SOURCE_DATA_UNAVAILABLE: "Unable to fetch data from your accounting software. Please try again in a moment.",
    ErrorCode.UNSUPPORTED_PROVIDER: "Unsupported accounting provider.",
    ErrorCode.INVALID_REQUEST: "Invalid request. Please check your input and try again.",
    ErrorCode.INTERNAL_ERROR: "Failed to generate insights. Please try again later.",
}


def sanitize_error_message(
    exception: Exception,
    error_code: ErrorCode,
    log_details: bool = True,
) -> str:
    """
    Sanitize error message for user-facing responses.

    Logs full exception details internally but returns user-friendly message.
    Invalid request errors keep their own message since it names the
    missing parameter.
    """
    if log_details:
        logger.error(
            "Error [%s]: %s",
            error_code.value,
            str(exception),
            exc_info=exception,
        )

    if isinstance(exception, InvalidInsightRequestError):
        return exception.message

    return ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR])


def get_error_code_for_exception(exception: Exception) -> tuple[ErrorCode, int]:
    """
    Map exception types to error codes and HTTP status codes.

    Returns:
        Tuple of (error_code, http_status_code)
    """
    if isinstance(exception, InvalidInsightRequestError):
        return ErrorCode.INVALID_REQUEST, status.HTTP_400_BAD_REQUEST

    if isinstance(exception, (SourceDataUnavailableError, ReportFetchError)):
        return ErrorCode.SOURCE_DATA_UNAVAILABLE, status.HTTP_502_BAD_GATEWAY

    return ErrorCode.INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR


async def global_exception_handler(_request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns sanitized error responses.
    Excludes HTTPException (intentional responses) and ValidationError (FastAPI validation).
    """
    if isinstance(exc, HTTPException):
        raise exc

    if isinstance(exc, RequestValidationError):
        raise exc

    error_code, http_status = get_error_code_for_exception(exc)
    message = sanitize_error_message(
        exc,
        error_code,
        log_details=error_code != ErrorCode.INVALID_REQUEST,
    )

    return JSONResponse(
        status_code=http_status,
        content={
            "error_code": error_code.value,
            "message": message,
        },
    )


def create_error_response(
    error_code: ErrorCode,
    message: Optional[str] = None,
    http_status: Optional[int] = None,
) -> HTTPException:
    """
    Create a standardized HTTPException with error code.

    Args:
        error_code: Error code enum
        message: Optional custom message (uses default if not provided)
        http_status: Optional HTTP status code (uses default if not provided)
    """
    if message is None:
        message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR])

    if http_status is None:
        if error_code == ErrorCode.SOURCE_DATA_UNAVAILABLE:
            http_status = status.HTTP_502_BAD_GATEWAY
        elif error_code in (ErrorCode.INVALID_REQUEST, ErrorCode.UNSUPPORTED_PROVIDER):
            http_status = status.HTTP_400_BAD_REQUEST
        else:
            http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    return HTTPException(
        status_code=http_status,
        detail={
            "error_code": error_code.value,
            "message": message,
        },
    )
