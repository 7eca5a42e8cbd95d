"""Authentication dependency for back-office endpoints.

API Gateway validates the JWT and forwards the subject claim in the
``x-user-sub`` header. Behind a REST API with a Cognito authorizer the claims
arrive in the Lambda event instead, which Mangum exposes as ``aws.event``.
"""

from dataclasses import dataclass

from fastapi import Request

from quotation.models import ErrorCode, QuoteError
from quotation.utils.logging import get_logger

logger = get_logger(__name__)

USER_SUB_HEADER = "x-user-sub"


@dataclass(frozen=True)
class SecurityRequirement:
    """Identity of the authenticated caller."""

    user_sub: str


def _user_sub_from_event(request: Request) -> str | None:
    event = request.scope.get("aws.event") or {}
    claims = event.get("requestContext", {}).get("authorizer", {}).get("claims", {})
    sub = claims.get("sub")
    return str(sub) if sub else None


def require_auth(request: Request) -> SecurityRequirement:
    """Resolve the caller identity or reject the request.

    Raises:
        QuoteError: AUTH_REQUIRED when no subject can be found.
    """
    # Starlette headers are case-insensitive
    user_sub = (request.headers.get(USER_SUB_HEADER) or "").strip() or _user_sub_from_event(
        request
    )
    if not user_sub:
        logger.warning("auth_user_sub_missing", extra={"path": request.url.path})
        raise QuoteError(ErrorCode.AUTH_REQUIRED)
    return SecurityRequirement(user_sub=user_sub)
