"""Pricing endpoint for live quote estimates.

Prices a room selection against the current catalog of a stay without
storing anything. All amounts are in EUR cents (e.g., 25000 = €250.00).
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog_service
from api.models.pricing import (
    BreakdownLineResponse,
    InstancePriceResponse,
    PriceQuoteRequest,
    PriceQuoteResponse,
)
from quotation.services.catalog import CatalogService
from quotation.services.pricing import (
    build_selections,
    instance_price,
    price_breakdown,
    total_price,
)
from quotation.utils.money import format_amount

router = APIRouter(tags=["pricing"])


@router.post(
    "/pricing/quote",
    summary="Price a room selection",
    description="""
Price a selection of room instances for a stay.

Each instance lists its occupants per age range. The response holds the
total, the price of each instance and its breakdown per age range.

**Notes:**
- Amounts are in EUR cents
- Prices cover the whole stay, not a single night
- Age ranges without a configured price contribute zero
- With sub-periods, each selected sub-period is priced and summed
""",
    response_description="Priced selection with breakdowns",
    response_model=PriceQuoteResponse,
    responses={
        400: {"description": "A room does not belong to the stay"},
        404: {"description": "Stay not found"},
        422: {"description": "Invalid request body"},
    },
)
async def price_quote(
    body: PriceQuoteRequest,
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> PriceQuoteResponse:
    """Price a selection against the stay catalog."""
    catalog = catalog_service.get_stay_catalog(body.stay_id)
    sub_period_ids = [p.id for p in catalog.sub_periods_by_id(body.sub_period_ids)]
    selections = build_selections(
        catalog,
        [(room.room_id, [i.occupants for i in room.instances]) for room in body.rooms],
    )

    instances: list[InstancePriceResponse] = []
    for selection in selections:
        room = selection.room
        for instance in selection.instances:
            price = instance_price(room, instance, sub_period_ids, catalog.age_ranges)
            instances.append(
                InstancePriceResponse(
                    room_id=room.id,
                    room_name=room.name,
                    instance_id=instance.id,
                    occupancy=instance.occupancy,
                    capacity=room.capacity,
                    over_capacity=instance.occupancy > room.capacity,
                    price=price,
                    price_display=format_amount(price),
                    breakdown=[
                        BreakdownLineResponse.from_line(line)
                        for line in price_breakdown(
                            room, instance, catalog.age_ranges, sub_period_ids
                        )
                    ],
                )
            )

    total = total_price(selections, sub_period_ids, catalog.age_ranges)
    return PriceQuoteResponse(
        stay_id=catalog.stay.id,
        sub_period_ids=sub_period_ids,
        total_price=total,
        total_price_display=format_amount(total),
        instances=instances,
    )
