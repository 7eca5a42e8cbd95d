"""Quote endpoints.

Provides REST endpoints for:
- Submitting a quote request (public)
- Listing, reviewing, updating the status of and deleting quotes (JWT required)

Protected endpoints rely on API Gateway validating the JWT and passing the
user identity via the x-user-sub header.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from starlette.status import HTTP_201_CREATED, HTTP_422_UNPROCESSABLE_CONTENT

from api.dependencies import get_quote_service
from api.models.common import SuccessMessage, ValidationErrorResponse, format_violations
from api.models.quotes import (
    QuoteDetailResponse,
    QuoteListResponse,
    QuoteResponse,
    QuoteStatusUpdateRequest,
)
from api.security import SecurityRequirement, require_auth
from quotation.models import ErrorCode, QuoteError, QuoteStatus
from quotation.services.quotes import QuoteService

router = APIRouter(tags=["quotes"])


@router.post(
    "/quotes",
    summary="Submit a quote request",
    description="""
Submit a finalized quote request for a stay.

The request is validated as a whole: every violated rule is reported in
one 422 response. A valid request is checked against the stay (active,
dates, night limits), priced and stored with status PENDING.

**Notes:**
- Dates use the YYYY-MM-DD format and check_in must be before check_out
- At least one participant count must be positive
- The stored total_price is frozen and never recomputed
""",
    response_description="Stored quote",
    response_model=QuoteResponse,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Quote stored"},
        400: {"description": "Dates or rooms not allowed for this stay"},
        404: {"description": "Stay not found or inactive"},
        422: {"description": "Invalid submission", "model": ValidationErrorResponse},
    },
)
async def submit_quote(
    payload: dict[str, Any] = Body(..., description="Quote submission, see QuoteRequest"),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse | JSONResponse:
    quote, result = service.submit_quote(payload)
    if quote is None:
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_CONTENT,
            content=format_violations(result.violations).model_dump(mode="json"),
        )
    return QuoteResponse.from_quote(quote)


@router.get(
    "/quotes",
    summary="List quotes",
    description="List quotes, newest first. **Requires JWT authentication.**",
    response_model=QuoteListResponse,
    responses={401: {"description": "JWT token required"}},
)
async def list_quotes(
    status: QuoteStatus | None = Query(default=None, description="Only quotes in this status"),
    auth: SecurityRequirement = Depends(require_auth),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteListResponse:
    quotes = service.list_quotes(status=status)
    return QuoteListResponse(
        quotes=[QuoteResponse.from_quote(q) for q in quotes],
        count=len(quotes),
    )


@router.get(
    "/quotes/{quote_id}",
    summary="Get quote",
    description="""
Get a quote by ID. **Requires JWT authentication.**

``total_price`` is the total frozen at submission. ``current_total`` prices
the same rooms with today's catalog, for comparison only.
""",
    response_model=QuoteDetailResponse,
    responses={
        401: {"description": "JWT token required"},
        404: {"description": "Quote not found"},
    },
)
async def get_quote(
    quote_id: str,
    auth: SecurityRequirement = Depends(require_auth),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteDetailResponse:
    quote = service.get_quote(quote_id)
    response = QuoteDetailResponse.from_quote(quote)
    try:
        response.current_total = service.reprice(quote)
    except QuoteError as e:
        if e.code != ErrorCode.STAY_NOT_FOUND:
            raise
    return response


@router.patch(
    "/quotes/{quote_id}/status",
    summary="Update quote status",
    description="Set the status of a quote. **Requires JWT authentication.**",
    response_model=QuoteResponse,
    responses={
        401: {"description": "JWT token required"},
        404: {"description": "Quote not found"},
    },
)
async def update_quote_status(
    quote_id: str,
    body: QuoteStatusUpdateRequest,
    auth: SecurityRequirement = Depends(require_auth),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    return QuoteResponse.from_quote(service.update_status(quote_id, body.status))


@router.delete(
    "/quotes/{quote_id}",
    summary="Delete quote",
    description="Delete a quote. **Requires JWT authentication.**",
    response_model=SuccessMessage,
    responses={
        401: {"description": "JWT token required"},
        404: {"description": "Quote not found"},
    },
)
async def delete_quote(
    quote_id: str,
    auth: SecurityRequirement = Depends(require_auth),
    service: QuoteService = Depends(get_quote_service),
) -> SuccessMessage:
    service.delete_quote(quote_id)
    return SuccessMessage(message=f"Quote {quote_id} deleted")
