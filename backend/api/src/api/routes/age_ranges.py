"""Age range administration endpoints (JWT required).

Age ranges are the pricing dimension of every room. An age range that is
still referenced by a room price cannot be deleted.
"""

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from api.dependencies import get_catalog_service
from api.models.age_ranges import AgeRangeCreateRequest, AgeRangeListResponse
from api.models.common import SuccessMessage
from api.models.stays import AgeRangeResponse
from api.security import SecurityRequirement, require_auth
from quotation.services.catalog import CatalogService

router = APIRouter(tags=["age-ranges"])


@router.get(
    "/age-ranges",
    summary="List age ranges",
    response_model=AgeRangeListResponse,
    responses={401: {"description": "JWT token required"}},
)
async def list_age_ranges(
    auth: SecurityRequirement = Depends(require_auth),
    service: CatalogService = Depends(get_catalog_service),
) -> AgeRangeListResponse:
    return AgeRangeListResponse(
        age_ranges=[AgeRangeResponse.from_age_range(a) for a in service.list_age_ranges()]
    )


@router.post(
    "/age-ranges",
    summary="Create age range",
    response_model=AgeRangeResponse,
    status_code=HTTP_201_CREATED,
    responses={
        401: {"description": "JWT token required"},
        422: {"description": "Invalid bounds or order"},
    },
)
async def create_age_range(
    body: AgeRangeCreateRequest,
    auth: SecurityRequirement = Depends(require_auth),
    service: CatalogService = Depends(get_catalog_service),
) -> AgeRangeResponse:
    return AgeRangeResponse.from_age_range(service.create_age_range(body.to_domain()))


@router.delete(
    "/age-ranges/{age_range_id}",
    summary="Delete age range",
    description="Delete an age range that no room price references.",
    response_model=SuccessMessage,
    responses={
        401: {"description": "JWT token required"},
        404: {"description": "Age range not found"},
        409: {"description": "Age range still used by room prices"},
    },
)
async def delete_age_range(
    age_range_id: str,
    auth: SecurityRequirement = Depends(require_auth),
    service: CatalogService = Depends(get_catalog_service),
) -> SuccessMessage:
    service.delete_age_range(age_range_id)
    return SuccessMessage(message=f"Age range {age_range_id} deleted")
