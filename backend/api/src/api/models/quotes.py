"""API models for quote endpoints."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from quotation.models import Quote, QuoteStatus
from quotation.utils.money import format_amount


class QuoteParticipantResponse(BaseModel):
    age_range_id: str
    count: int


class QuoteRoomOccupantResponse(BaseModel):
    age_range_id: str
    count: int


class QuoteRoomResponse(BaseModel):
    room_id: str
    room_name: str
    quantity: int
    occupants: list[QuoteRoomOccupantResponse] = Field(default_factory=list)


class QuoteResponse(BaseModel):
    """Stored quote with its frozen total."""

    id: str
    quote_number: str
    stay_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    check_in: dt.date
    check_out: dt.date
    nights: int
    special_requests: str | None = None
    status: QuoteStatus
    total_price: int = Field(..., description="Frozen total in EUR cents")
    total_price_display: str
    currency: str = "EUR"
    participants: list[QuoteParticipantResponse] = Field(default_factory=list)
    rooms: list[QuoteRoomResponse] = Field(default_factory=list)
    sub_period_ids: list[str] = Field(default_factory=list)
    created_at: dt.datetime

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteResponse":
        data = quote.model_dump(exclude={"participants", "rooms"})
        return cls(
            **data,
            nights=quote.nights,
            total_price_display=format_amount(quote.total_price),
            participants=[
                QuoteParticipantResponse(age_range_id=p.age_range_id, count=p.count)
                for p in quote.participants
            ],
            rooms=[
                QuoteRoomResponse(
                    room_id=r.room_id,
                    room_name=r.room_name,
                    quantity=r.quantity,
                    occupants=[
                        QuoteRoomOccupantResponse(age_range_id=o.age_range_id, count=o.count)
                        for o in r.occupants
                    ],
                )
                for r in quote.rooms
            ],
        )


class QuoteDetailResponse(QuoteResponse):
    """Quote with a comparison against current catalog prices."""

    current_total: int | None = Field(
        default=None,
        description="Total with today's prices (EUR cents); None if the stay is gone",
    )


class QuoteListResponse(BaseModel):
    """Quotes, newest first."""

    quotes: list[QuoteResponse] = Field(default_factory=list)
    count: int = Field(..., ge=0)


class QuoteStatusUpdateRequest(BaseModel):
    """New status for a quote."""

    model_config = ConfigDict(json_schema_extra={"examples": [{"status": "ACCEPTED"}]})

    status: QuoteStatus
