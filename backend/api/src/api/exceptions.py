"""FastAPI exception handlers for converting domain errors to HTTP responses.

QuoteError is rendered as an ErrorResponse body with a status derived from its
ErrorCode:
- 400 Bad Request: Business rule violations on a valid request
- 401 Unauthorized: Authentication required
- 404 Not Found: Resource not found or not available
- 409 Conflict: Resource still referenced

PricingComputationError means the catalog holds data the engine cannot price
and is reported as a 500. Request validation errors become a 422
ValidationErrorResponse.

Usage:
    from api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from api.models.common import format_validation_errors
from quotation.models import ErrorCode, PricingComputationError, QuoteError
from quotation.utils.logging import get_logger

logger = get_logger(__name__)

# Map ErrorCode to HTTP status codes
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    # Missing or unavailable resources -> 404 Not Found
    ErrorCode.STAY_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.STAY_INACTIVE: HTTP_404_NOT_FOUND,
    ErrorCode.QUOTE_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.AGE_RANGE_NOT_FOUND: HTTP_404_NOT_FOUND,
    # Business rule violations -> 400 Bad Request
    ErrorCode.DATES_OUTSIDE_STAY: HTTP_400_BAD_REQUEST,
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: HTTP_400_BAD_REQUEST,
    ErrorCode.MAXIMUM_NIGHTS_EXCEEDED: HTTP_400_BAD_REQUEST,
    ErrorCode.PARTIAL_BOOKING_NOT_ALLOWED: HTTP_400_BAD_REQUEST,
    ErrorCode.ROOM_NOT_FOUND: HTTP_400_BAD_REQUEST,
    # Authentication errors -> 401 Unauthorized
    ErrorCode.AUTH_REQUIRED: HTTP_401_UNAUTHORIZED,
    # Referenced resources -> 409 Conflict
    ErrorCode.AGE_RANGE_IN_USE: HTTP_409_CONFLICT,
}

INTERNAL_ERROR_BODY = {
    "success": False,
    "error_code": "ERR_INTERNAL",
    "message": "An unexpected error occurred",
    "recovery": "Please try again later or contact support",
    "details": None,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """HTTP status for an ErrorCode, 400 when not explicitly mapped."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def quote_error_handler(request: Request, exc: QuoteError) -> JSONResponse:
    """Render a QuoteError as an ErrorResponse."""
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def pricing_error_handler(
    request: Request, exc: PricingComputationError
) -> JSONResponse:
    """Report a catalog that cannot be priced without exposing its contents."""
    logger.error(
        "Pricing computation failed: %s",
        exc,
        extra={"room_id": exc.room_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Wrap FastAPI request validation errors in ValidationErrorResponse."""
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content=format_validation_errors(list(exc.errors())).model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(QuoteError, quote_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(PricingComputationError, pricing_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
