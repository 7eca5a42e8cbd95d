"""Shared API request/response models.

Error wrappers and validation error formatting used across endpoints. Domain
models live in quotation.models; this module only covers HTTP concerns.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from quotation.models import ErrorResponse, FieldViolation

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
    "ValidationErrorDetail",
    "SuccessMessage",
    "format_validation_errors",
    "format_violations",
]


class ValidationErrorDetail(BaseModel):
    """Detail of a single validation error."""

    model_config = ConfigDict(strict=True)

    loc: list[str | int] = Field(
        ...,
        description="Path to the field that failed validation",
        examples=[["body", "check_in"]],
    )
    msg: str = Field(
        ...,
        description="Human-readable error message",
        examples=["check_in must be before check_out"],
    )
    type: str = Field(
        ...,
        description="Error type identifier",
        examples=["value_error"],
    )


class ValidationErrorResponse(BaseModel):
    """Response format for request validation errors (HTTP 422).

    Every violated rule is listed in ``details``.
    """

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: str = "ERR_VALIDATION"
    message: str = "Request validation failed"
    recovery: str = "Check the request parameters and try again"
    details: list[ValidationErrorDetail] = Field(default_factory=list)


class SuccessMessage(BaseModel):
    """Generic success response for operations without data payload."""

    model_config = ConfigDict(strict=True)

    success: bool = True
    message: str = Field(
        default="Operation completed successfully",
        description="Human-readable success message",
    )


def format_validation_errors(errors: list[dict[str, Any]]) -> ValidationErrorResponse:
    """Convert Pydantic validation errors to ValidationErrorResponse."""
    details = [
        ValidationErrorDetail(
            loc=[str(loc) for loc in error.get("loc", [])],
            msg=str(error.get("msg", "")),
            type=str(error.get("type", "")),
        )
        for error in errors
    ]
    return ValidationErrorResponse(details=details)


def format_violations(violations: Iterable[FieldViolation]) -> ValidationErrorResponse:
    """Convert quote submission violations to ValidationErrorResponse.

    ``rooms.0.occupants`` becomes ``["body", "rooms", "0", "occupants"]``.
    """
    details = [
        ValidationErrorDetail(
            loc=["body", *(v.field.split(".") if v.field != "__root__" else [])],
            msg=v.message,
            type=v.type,
        )
        for v in violations
    ]
    return ValidationErrorResponse(details=details)
