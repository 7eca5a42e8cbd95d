"""Public stay endpoints.

Lists active stays with "from" prices and serves the catalog of one stay
(rooms, prices, age ranges and sub-periods) used to build a quote.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog_service
from api.models.stays import StayDetailResponse, StayListResponse, StaySummaryResponse
from quotation.models import ErrorCode, QuoteError
from quotation.services.catalog import CatalogService

router = APIRouter(tags=["stays"])


@router.get(
    "/stays",
    summary="List active stays",
    description="""
List active stays sorted by start date.

Each stay carries a "from" price per age range: the average global price of
that age range across the rooms of the stay hotel, in EUR cents.
""",
    response_model=StayListResponse,
)
async def list_stays(
    service: CatalogService = Depends(get_catalog_service),
) -> StayListResponse:
    stays = [
        StaySummaryResponse.from_catalog(service.get_stay_catalog(stay.id))
        for stay in service.list_active_stays()
    ]
    return StayListResponse(stays=stays)


@router.get(
    "/stays/{stay_id}",
    summary="Get stay catalog",
    description="""
Get an active stay with its rooms, prices, age ranges and sub-periods.

**Notes:**
- Inactive stays are reported as not found
- Prices are per person for the whole stay, in EUR cents
""",
    response_model=StayDetailResponse,
    responses={404: {"description": "Stay not found or inactive"}},
)
async def get_stay(
    stay_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> StayDetailResponse:
    catalog = service.get_stay_catalog(stay_id)
    if not catalog.stay.is_active:
        raise QuoteError(ErrorCode.STAY_INACTIVE, {"stay_id": stay_id})
    return StayDetailResponse.from_catalog(catalog)
