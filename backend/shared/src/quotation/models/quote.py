"""Quote models: submission payload, persisted quote and price breakdown lines.

Amounts are stored in EUR cents. The total price of a persisted quote is a
snapshot taken at submission time and is never recomputed on read.
"""

import datetime as dt
import re
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    model_validator,
)

from .enums import QuoteStatus

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

EntityId = Annotated[str, Field(pattern=UUID_PATTERN)]


def parse_iso_date(value: Any) -> dt.date:
    """Parse a YYYY-MM-DD calendar date.

    Raises:
        ValueError: If the value is not a valid date in that exact format.
    """
    if isinstance(value, dt.datetime):
        raise ValueError("Invalid date format, expected YYYY-MM-DD")
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValueError("Invalid date format, expected YYYY-MM-DD")
    return dt.date.fromisoformat(value)


IsoDate = Annotated[dt.date, BeforeValidator(parse_iso_date)]

DATE_ORDER_MESSAGE = "check_in must be before check_out"
PARTICIPANTS_MESSAGE = "At least one participant is required"


def dates_ordered(check_in: dt.date, check_out: dt.date) -> bool:
    """Check-in must be strictly before check-out."""
    return check_in < check_out


def has_participants(counts: list[int]) -> bool:
    """At least one participant count must be positive."""
    return any(count > 0 for count in counts)


class ParticipantRequest(BaseModel):
    """Headcount for one age range."""

    model_config = ConfigDict(strict=False)

    age_range_id: EntityId
    count: int = Field(..., ge=0, strict=True)


class QuoteRoomRequest(BaseModel):
    """A room type requested in a quote, with optional occupants."""

    model_config = ConfigDict(strict=False)

    room_id: EntityId
    quantity: int = Field(..., ge=1, strict=True)
    occupants: list[ParticipantRequest] | None = None


class QuoteRequest(BaseModel):
    """Finalized quote submission.

    Cross-field rules (date order, at least one participant) are enforced
    here too, so a constructed QuoteRequest is always valid.
    """

    model_config = ConfigDict(
        # JSON has no date type, dates arrive as strings
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "stay_id": "0b7f4a52-62c4-4a8e-9d4b-0e1f3c2a9b10",
                    "first_name": "Marie",
                    "last_name": "Dupont",
                    "email": "marie@example.com",
                    "phone": "+33612345678",
                    "check_in": "2025-07-05",
                    "check_out": "2025-07-12",
                    "participants": [
                        {"age_range_id": "5a0c6e9e-0d3f-4d7a-8d8e-1c2b3a4d5e6f", "count": 2}
                    ],
                    "rooms": [
                        {
                            "room_id": "7e9f1a2b-3c4d-4e5f-8a9b-0c1d2e3f4a5b",
                            "quantity": 1,
                            "occupants": [
                                {
                                    "age_range_id": "5a0c6e9e-0d3f-4d7a-8d8e-1c2b3a4d5e6f",
                                    "count": 2,
                                }
                            ],
                        }
                    ],
                }
            ]
        },
    )

    stay_id: EntityId
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    check_in: IsoDate
    check_out: IsoDate
    participants: list[ParticipantRequest] = Field(..., min_length=1)
    rooms: list[QuoteRoomRequest] | None = None
    sub_period_ids: list[EntityId] = Field(
        default_factory=list,
        description="Selected sub-periods; empty means the whole stay",
    )
    special_requests: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_rules(self) -> "QuoteRequest":
        if not dates_ordered(self.check_in, self.check_out):
            raise ValueError(DATE_ORDER_MESSAGE)
        if not has_participants([p.count for p in self.participants]):
            raise ValueError(PARTICIPANTS_MESSAGE)
        return self

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class FieldViolation(BaseModel):
    """One violated submission rule."""

    model_config = ConfigDict(strict=True, frozen=True)

    field: str = Field(..., description="Dotted path of the offending field")
    message: str
    type: str = "value_error"


class ValidationResult(BaseModel):
    """Outcome of validating a quote submission."""

    model_config = ConfigDict(strict=True)

    violations: list[FieldViolation] = Field(default_factory=list)
    request: QuoteRequest | None = None

    @property
    def is_valid(self) -> bool:
        return not self.violations and self.request is not None

    def fields(self) -> list[str]:
        """Paths of all violated fields, in report order."""
        return [v.field for v in self.violations]


class QuoteParticipant(BaseModel):
    """Persisted headcount per age range for a whole quote."""

    model_config = ConfigDict(strict=True, frozen=True)

    age_range_id: str
    count: int = Field(..., ge=0)


class QuoteRoomOccupant(BaseModel):
    """Persisted occupants of one age range in a quote room."""

    model_config = ConfigDict(strict=True, frozen=True)

    age_range_id: str
    count: int = Field(..., ge=0)


class QuoteRoom(BaseModel):
    """Persisted room line of a quote."""

    model_config = ConfigDict(strict=True, frozen=True)

    room_id: str
    room_name: str
    quantity: int = Field(..., ge=1)
    occupants: list[QuoteRoomOccupant] = Field(default_factory=list)


class Quote(BaseModel):
    """A submitted, priced quote."""

    model_config = ConfigDict(strict=True)

    id: str = Field(..., description="Unique quote ID")
    quote_number: str = Field(..., description="Human-readable number, e.g. DEV-2025-123456")
    stay_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    check_in: dt.date
    check_out: dt.date
    special_requests: str | None = None
    status: QuoteStatus = QuoteStatus.PENDING
    total_price: int = Field(..., ge=0, description="Frozen total in EUR cents")
    participants: list[QuoteParticipant] = Field(default_factory=list)
    rooms: list[QuoteRoom] = Field(default_factory=list)
    sub_period_ids: list[str] = Field(default_factory=list)
    created_at: dt.datetime

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class PriceBreakdownLine(BaseModel):
    """Contribution of one age range to a room instance price."""

    model_config = ConfigDict(strict=True, frozen=True)

    age_range_id: str
    age_range_name: str
    count: int = Field(..., ge=1)
    price_per_person: int = Field(..., ge=0, description="EUR cents")
    subtotal: int = Field(..., ge=0, description="EUR cents")
