"""Standard error codes for the quotation service.

Domain operations raise QuoteError with one of these codes. The API layer
maps each code to an HTTP status and renders an ErrorResponse body.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes returned by quotation operations."""

    # Stay / submission errors (ERR_QUOTE_001-ERR_QUOTE_008)
    STAY_NOT_FOUND = "ERR_QUOTE_001"
    STAY_INACTIVE = "ERR_QUOTE_002"
    DATES_OUTSIDE_STAY = "ERR_QUOTE_003"
    MINIMUM_NIGHTS_NOT_MET = "ERR_QUOTE_004"
    MAXIMUM_NIGHTS_EXCEEDED = "ERR_QUOTE_005"
    ROOM_NOT_FOUND = "ERR_QUOTE_006"
    QUOTE_NOT_FOUND = "ERR_QUOTE_007"
    PARTIAL_BOOKING_NOT_ALLOWED = "ERR_QUOTE_008"

    # Catalog errors (ERR_CATALOG_001-ERR_CATALOG_002)
    AGE_RANGE_NOT_FOUND = "ERR_CATALOG_001"
    AGE_RANGE_IN_USE = "ERR_CATALOG_002"

    # Authentication errors
    AUTH_REQUIRED = "ERR_AUTH_001"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.STAY_NOT_FOUND: "The requested stay does not exist",
    ErrorCode.STAY_INACTIVE: "The requested stay is not available",
    ErrorCode.DATES_OUTSIDE_STAY: "The selected dates are outside the stay period",
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: "Minimum number of nights not met for this stay",
    ErrorCode.MAXIMUM_NIGHTS_EXCEEDED: "Maximum number of nights exceeded for this stay",
    ErrorCode.ROOM_NOT_FOUND: "A selected room does not belong to this stay",
    ErrorCode.QUOTE_NOT_FOUND: "Quote not found",
    ErrorCode.PARTIAL_BOOKING_NOT_ALLOWED: "This stay must be booked for its full period",
    ErrorCode.AGE_RANGE_NOT_FOUND: "Age range not found",
    ErrorCode.AGE_RANGE_IN_USE: "Age range is still referenced by room pricing",
    ErrorCode.AUTH_REQUIRED: "Authentication required to perform this action",
}

# Recovery suggestions for clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.STAY_NOT_FOUND: "Check the stay identifier and try again",
    ErrorCode.STAY_INACTIVE: "Choose another stay from the active stays list",
    ErrorCode.DATES_OUTSIDE_STAY: "Pick dates between the stay start and end dates",
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: "Extend the requested period",
    ErrorCode.MAXIMUM_NIGHTS_EXCEEDED: "Shorten the requested period",
    ErrorCode.ROOM_NOT_FOUND: "Reload the stay and select rooms again",
    ErrorCode.QUOTE_NOT_FOUND: "Verify the quote identifier",
    ErrorCode.PARTIAL_BOOKING_NOT_ALLOWED: "Use the stay start and end dates",
    ErrorCode.AGE_RANGE_NOT_FOUND: "Verify the age range identifier",
    ErrorCode.AGE_RANGE_IN_USE: "Remove the room prices using this age range first",
    ErrorCode.AUTH_REQUIRED: "Sign in and retry the request",
}


class ErrorResponse(BaseModel):
    """Standard error body for failed operations."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class QuoteError(Exception):
    """Exception raised by quotation and catalog operations."""

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)


class PricingComputationError(Exception):
    """Structurally impossible input reached the pricing engine.

    Raised for data-integrity problems (e.g. a negative stored price), never
    for user input.
    """

    def __init__(self, message: str, room_id: str | None = None):
        self.room_id = room_id
        super().__init__(message)
