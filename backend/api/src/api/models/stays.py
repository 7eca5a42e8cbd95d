"""API models for stay listing and detail endpoints."""

import datetime as dt

from pydantic import BaseModel, Field

from quotation.models import AgeRange, PersistedStay, Room, StayCatalog, SubPeriod
from quotation.services.pricing import average_price
from quotation.utils.money import format_amount


class AgeRangeResponse(BaseModel):
    """Age range as shown to clients."""

    id: str
    name: str
    min_age: int | None = None
    max_age: int | None = None
    order: int = 0

    @classmethod
    def from_age_range(cls, age_range: AgeRange) -> "AgeRangeResponse":
        return cls(**age_range.model_dump())


class FromPriceResponse(BaseModel):
    """Average global price of an age range across the rooms of a stay."""

    age_range_id: str
    age_range_name: str
    average_price: int = Field(..., description="EUR cents")
    average_price_display: str


class RoomPricingResponse(BaseModel):
    age_range_id: str
    sub_period_id: str | None = None
    price: int = Field(..., description="Price per person in EUR cents")


class RoomResponse(BaseModel):
    """Room type with its price table."""

    id: str
    name: str
    description: str | None = None
    capacity: int
    image_url: str | None = None
    pricings: list[RoomPricingResponse] = Field(default_factory=list)

    @classmethod
    def from_room(cls, room: Room) -> "RoomResponse":
        return cls(
            id=room.id,
            name=room.name,
            description=room.description,
            capacity=room.capacity,
            image_url=room.image_url,
            pricings=[
                RoomPricingResponse(
                    age_range_id=p.age_range_id,
                    sub_period_id=p.sub_period_id,
                    price=p.price,
                )
                for p in room.room_pricings
            ],
        )


class SubPeriodResponse(BaseModel):
    id: str
    name: str
    start_date: dt.date
    end_date: dt.date
    order: int = 0

    @classmethod
    def from_sub_period(cls, sub_period: SubPeriod) -> "SubPeriodResponse":
        return cls(
            id=sub_period.id,
            name=sub_period.name,
            start_date=sub_period.start_date,
            end_date=sub_period.end_date,
            order=sub_period.order,
        )


class StaySummaryResponse(BaseModel):
    """Stay as listed on the public site."""

    id: str
    name: str
    slug: str
    description: str | None = None
    start_date: dt.date
    end_date: dt.date
    nights: int
    allow_partial_booking: bool
    min_days: int | None = None
    max_days: int | None = None
    image_url: str | None = None
    from_prices: list[FromPriceResponse] = Field(default_factory=list)

    @classmethod
    def from_catalog(cls, catalog: StayCatalog) -> "StaySummaryResponse":
        stay: PersistedStay = catalog.stay
        from_prices = []
        for age_range in catalog.age_ranges:
            average = average_price(age_range.id, catalog.rooms)
            if average > 0:
                from_prices.append(
                    FromPriceResponse(
                        age_range_id=age_range.id,
                        age_range_name=age_range.name,
                        average_price=average,
                        average_price_display=format_amount(average),
                    )
                )
        return cls(
            id=stay.id,
            name=stay.name,
            slug=stay.slug,
            description=stay.description,
            start_date=stay.start_date,
            end_date=stay.end_date,
            nights=stay.duration,
            allow_partial_booking=stay.allow_partial_booking,
            min_days=stay.min_days,
            max_days=stay.max_days,
            image_url=stay.image_url,
            from_prices=from_prices,
        )


class StayListResponse(BaseModel):
    """Active stays sorted by start date."""

    stays: list[StaySummaryResponse] = Field(default_factory=list)


class StayDetailResponse(StaySummaryResponse):
    """Stay with everything needed to build a quote."""

    rooms: list[RoomResponse] = Field(default_factory=list)
    age_ranges: list[AgeRangeResponse] = Field(default_factory=list)
    sub_periods: list[SubPeriodResponse] = Field(default_factory=list)

    @classmethod
    def from_catalog(cls, catalog: StayCatalog) -> "StayDetailResponse":
        summary = StaySummaryResponse.from_catalog(catalog)
        return cls(
            **summary.model_dump(exclude={"from_prices"}),
            from_prices=summary.from_prices,
            rooms=[RoomResponse.from_room(r) for r in catalog.rooms],
            age_ranges=[AgeRangeResponse.from_age_range(a) for a in catalog.age_ranges],
            sub_periods=[SubPeriodResponse.from_sub_period(p) for p in catalog.sub_periods],
        )
