"""API models for the pricing endpoint.

Amounts are EUR cents; ``*_display`` fields carry the formatted string so
clients never do money arithmetic themselves.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from quotation.models import PriceBreakdownLine
from quotation.utils.money import format_amount

OccupantCount = Annotated[int, Field(ge=0)]


class InstanceRequest(BaseModel):
    """Occupants of one room instance, keyed by age range ID."""

    occupants: dict[str, OccupantCount] = Field(default_factory=dict)


class RoomSelectionRequest(BaseModel):
    """Instances of one room type to price."""

    room_id: str
    instances: list[InstanceRequest] = Field(..., min_length=1)


class PriceQuoteRequest(BaseModel):
    """Selection to price against a stay."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "stay_id": "0b7f4a52-62c4-4a8e-9d4b-0e1f3c2a9b10",
                    "sub_period_ids": [],
                    "rooms": [
                        {
                            "room_id": "7e9f1a2b-3c4d-4e5f-8a9b-0c1d2e3f4a5b",
                            "instances": [
                                {"occupants": {"5a0c6e9e-0d3f-4d7a-8d8e-1c2b3a4d5e6f": 2}}
                            ],
                        }
                    ],
                }
            ]
        },
    )

    stay_id: str
    rooms: list[RoomSelectionRequest] = Field(default_factory=list)
    sub_period_ids: list[str] = Field(
        default_factory=list,
        description="Selected sub-periods; empty means global prices",
    )


class BreakdownLineResponse(BaseModel):
    """One age range line of an instance price."""

    age_range_id: str
    age_range_name: str
    count: int
    price_per_person: int = Field(..., description="EUR cents")
    subtotal: int = Field(..., description="EUR cents")
    price_per_person_display: str
    subtotal_display: str

    @classmethod
    def from_line(cls, line: PriceBreakdownLine) -> "BreakdownLineResponse":
        return cls(
            age_range_id=line.age_range_id,
            age_range_name=line.age_range_name,
            count=line.count,
            price_per_person=line.price_per_person,
            subtotal=line.subtotal,
            price_per_person_display=format_amount(line.price_per_person),
            subtotal_display=format_amount(line.subtotal),
        )


class InstancePriceResponse(BaseModel):
    """Price of one room instance."""

    room_id: str
    room_name: str
    instance_id: str
    occupancy: int
    capacity: int
    over_capacity: bool = Field(..., description="Informational; not enforced here")
    price: int = Field(..., description="EUR cents")
    price_display: str
    breakdown: list[BreakdownLineResponse] = Field(default_factory=list)


class PriceQuoteResponse(BaseModel):
    """Priced selection."""

    stay_id: str
    sub_period_ids: list[str] = Field(default_factory=list)
    total_price: int = Field(..., description="EUR cents")
    total_price_display: str
    currency: str = "EUR"
    instances: list[InstancePriceResponse] = Field(default_factory=list)
