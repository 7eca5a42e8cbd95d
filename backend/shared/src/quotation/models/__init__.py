"""Pydantic models for stay quotation data entities."""

from .catalog import (
    AgeRange,
    AgeRangeCatalog,
    AgeRangeCreate,
    Room,
    RoomPricing,
    StayCatalog,
    SubPeriod,
)
from .enums import QuoteStatus
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    ErrorCode,
    ErrorResponse,
    PricingComputationError,
    QuoteError,
)
from .hotel import (
    NewHotelDraft,
    NewStayDraft,
    PersistedHotel,
    PersistedStay,
    normalize_slug,
)
from .quote import (
    FieldViolation,
    ParticipantRequest,
    PriceBreakdownLine,
    Quote,
    QuoteParticipant,
    QuoteRequest,
    QuoteRoom,
    QuoteRoomOccupant,
    QuoteRoomRequest,
    ValidationResult,
)
from .selection import (
    RoomInstance,
    RoomSelection,
    add_room,
    adjust_occupant_count,
    assigned_count,
    instance_occupancy,
    new_instance,
    remaining_participants,
    remove_instance,
    remove_room,
    set_occupant_count,
)

__all__ = [
    # Enums
    "QuoteStatus",
    # Catalog
    "AgeRange",
    "AgeRangeCatalog",
    "AgeRangeCreate",
    "Room",
    "RoomPricing",
    "StayCatalog",
    "SubPeriod",
    # Hotel / Stay
    "NewHotelDraft",
    "NewStayDraft",
    "PersistedHotel",
    "PersistedStay",
    "normalize_slug",
    # Selection
    "RoomInstance",
    "RoomSelection",
    "add_room",
    "adjust_occupant_count",
    "assigned_count",
    "instance_occupancy",
    "new_instance",
    "remaining_participants",
    "remove_instance",
    "remove_room",
    "set_occupant_count",
    # Quote
    "FieldViolation",
    "ParticipantRequest",
    "PriceBreakdownLine",
    "Quote",
    "QuoteParticipant",
    "QuoteRequest",
    "QuoteRoom",
    "QuoteRoomOccupant",
    "QuoteRoomRequest",
    "ValidationResult",
    # Errors
    "ErrorCode",
    "ErrorResponse",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "PricingComputationError",
    "QuoteError",
]
