"""Quote service: submission, review and status lifecycle.

Submission validates the raw payload, checks it against the stay, prices it
with the pricing engine and stores the quote with a frozen total. Reading a
quote never recomputes that total.
"""

import datetime as dt
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from quotation.models import (
    ErrorCode,
    Quote,
    QuoteError,
    QuoteParticipant,
    QuoteRequest,
    QuoteRoom,
    QuoteRoomOccupant,
    QuoteStatus,
    StayCatalog,
    ValidationResult,
)
from quotation.utils.logging import get_logger, log_quote_operation

from .pricing import price_quote_rooms
from .validation import QuoteValidator

if TYPE_CHECKING:
    from .catalog import CatalogService
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

QUOTE_NUMBER_PREFIX = "DEV"


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def generate_quote_number(now: dt.datetime) -> str:
    """Human-readable quote number like DEV-2025-123456.

    The suffix is the last six digits of the millisecond timestamp.
    """
    millis = int(now.timestamp() * 1000)
    return f"{QUOTE_NUMBER_PREFIX}-{now.year}-{millis % 1_000_000:06d}"


def check_stay_rules(request: QuoteRequest, catalog: StayCatalog) -> None:
    """Check requested dates against the stay.

    Raises:
        QuoteError: STAY_INACTIVE, DATES_OUTSIDE_STAY,
            PARTIAL_BOOKING_NOT_ALLOWED, MINIMUM_NIGHTS_NOT_MET or
            MAXIMUM_NIGHTS_EXCEEDED.
    """
    stay = catalog.stay
    if not stay.is_active:
        raise QuoteError(ErrorCode.STAY_INACTIVE, {"stay_id": stay.id})

    if not stay.contains_dates(request.check_in, request.check_out):
        raise QuoteError(
            ErrorCode.DATES_OUTSIDE_STAY,
            {
                "stay_start": stay.start_date.isoformat(),
                "stay_end": stay.end_date.isoformat(),
            },
        )

    if not stay.allow_partial_booking:
        if (request.check_in, request.check_out) != (stay.start_date, stay.end_date):
            raise QuoteError(
                ErrorCode.PARTIAL_BOOKING_NOT_ALLOWED,
                {
                    "stay_start": stay.start_date.isoformat(),
                    "stay_end": stay.end_date.isoformat(),
                },
            )
        return

    nights = request.nights
    if stay.min_days is not None and nights < stay.min_days:
        raise QuoteError(
            ErrorCode.MINIMUM_NIGHTS_NOT_MET,
            {"min_days": str(stay.min_days), "nights": str(nights)},
        )
    if stay.max_days is not None and nights > stay.max_days:
        raise QuoteError(
            ErrorCode.MAXIMUM_NIGHTS_EXCEEDED,
            {"max_days": str(stay.max_days), "nights": str(nights)},
        )


def build_quote_rooms(request: QuoteRequest, catalog: StayCatalog) -> list[QuoteRoom]:
    """Resolve requested rooms against the catalog.

    Raises:
        QuoteError: ROOM_NOT_FOUND if a room does not belong to the stay hotel.
    """
    quote_rooms: list[QuoteRoom] = []
    for room_request in request.rooms or []:
        room = catalog.room(room_request.room_id)
        if room is None:
            raise QuoteError(ErrorCode.ROOM_NOT_FOUND, {"room_id": room_request.room_id})
        quote_rooms.append(
            QuoteRoom(
                room_id=room.id,
                room_name=room.name,
                quantity=room_request.quantity,
                occupants=[
                    QuoteRoomOccupant(age_range_id=o.age_range_id, count=o.count)
                    for o in room_request.occupants or []
                    if o.count > 0
                ],
            )
        )
    return quote_rooms


class QuoteService:
    """Service for submitting and managing quotes."""

    QUOTES_TABLE = "quotes"

    def __init__(
        self,
        db: "DynamoDBService",
        catalog: "CatalogService",
        validator: QuoteValidator | None = None,
        clock: Callable[[], dt.datetime] = _utcnow,
    ) -> None:
        """Initialize quote service.

        Args:
            db: DynamoDB service instance
            catalog: Catalog service used to load stay snapshots
            validator: Submission validator (defaults to env configuration)
            clock: Source of the current UTC time
        """
        self.db = db
        self.catalog = catalog
        self.validator = validator or QuoteValidator()
        self.clock = clock

    def submit_quote(self, payload: Any) -> tuple[Quote | None, ValidationResult]:
        """Validate, price and store a quote submission.

        Args:
            payload: Raw submission (decoded JSON object)

        Returns:
            Tuple of (stored quote, validation result). The quote is None when
            the result carries violations.

        Raises:
            QuoteError: If the stay or a room cannot be used for this quote.
            PricingComputationError: If the catalog holds a negative price.
        """
        result = self.validator.validate(payload)
        if result.request is None:
            return None, result

        request = result.request
        catalog = self.catalog.get_stay_catalog(request.stay_id)

        try:
            check_stay_rules(request, catalog)
        except QuoteError as e:
            log_quote_operation(
                logger, "submit_quote", stay_id=request.stay_id, error=e.code.value
            )
            raise

        capacity_violations = self.validator.check_capacity(request, catalog)
        if capacity_violations:
            return None, ValidationResult(violations=capacity_violations)

        quote_rooms = build_quote_rooms(request, catalog)
        sub_period_ids = [p.id for p in catalog.sub_periods_by_id(request.sub_period_ids)]
        total = price_quote_rooms(
            quote_rooms,
            {room.id: room for room in catalog.rooms},
            sub_period_ids,
            catalog.age_ranges,
        )

        now = self.clock()
        quote = Quote(
            id=str(uuid.uuid4()),
            quote_number=generate_quote_number(now),
            stay_id=request.stay_id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=str(request.email),
            phone=request.phone,
            check_in=request.check_in,
            check_out=request.check_out,
            special_requests=request.special_requests,
            status=QuoteStatus.PENDING,
            total_price=total,
            participants=[
                QuoteParticipant(age_range_id=p.age_range_id, count=p.count)
                for p in request.participants
                if p.count > 0
            ],
            rooms=quote_rooms,
            sub_period_ids=sub_period_ids,
            created_at=now,
        )

        self.db.put_item(
            self.QUOTES_TABLE,
            self._quote_to_item(quote),
            condition_expression="attribute_not_exists(quote_id)",
        )
        log_quote_operation(
            logger,
            "submit_quote",
            quote_id=quote.id,
            stay_id=quote.stay_id,
            total_price=quote.total_price,
            status=quote.status.value,
            quote_number=quote.quote_number,
        )
        return quote, result

    def get_quote(self, quote_id: str) -> Quote:
        """Get a quote by ID.

        Raises:
            QuoteError: QUOTE_NOT_FOUND if it does not exist.
        """
        item = self.db.get_item(self.QUOTES_TABLE, {"quote_id": quote_id})
        if not item:
            raise QuoteError(ErrorCode.QUOTE_NOT_FOUND, {"quote_id": quote_id})
        return self._item_to_quote(item)

    def list_quotes(self, status: QuoteStatus | None = None) -> list[Quote]:
        """All quotes, newest first, optionally filtered by status."""
        quotes = [self._item_to_quote(item) for item in self.db.scan(self.QUOTES_TABLE)]
        if status is not None:
            quotes = [q for q in quotes if q.status == status]
        return sorted(quotes, key=lambda q: q.created_at, reverse=True)

    def update_status(self, quote_id: str, status: QuoteStatus) -> Quote:
        """Change the status of a quote.

        Raises:
            QuoteError: QUOTE_NOT_FOUND if it does not exist.
        """
        attrs = self.db.update_item(
            self.QUOTES_TABLE,
            {"quote_id": quote_id},
            update_expression="SET #status = :status",
            expression_attribute_values={":status": status.value},
            expression_attribute_names={"#status": "status"},
            condition_expression="attribute_exists(quote_id)",
        )
        if attrs is None:
            raise QuoteError(ErrorCode.QUOTE_NOT_FOUND, {"quote_id": quote_id})

        log_quote_operation(logger, "update_status", quote_id=quote_id, status=status.value)
        return self._item_to_quote(attrs)

    def delete_quote(self, quote_id: str) -> None:
        """Delete a quote.

        Raises:
            QuoteError: QUOTE_NOT_FOUND if it does not exist.
        """
        deleted = self.db.delete_item(
            self.QUOTES_TABLE,
            {"quote_id": quote_id},
            condition_expression="attribute_exists(quote_id)",
        )
        if not deleted:
            raise QuoteError(ErrorCode.QUOTE_NOT_FOUND, {"quote_id": quote_id})
        log_quote_operation(logger, "delete_quote", quote_id=quote_id)

    def reprice(self, quote: Quote) -> int:
        """Price a stored quote against the current catalog.

        Only used to compare with the frozen ``total_price``; the stored total
        stays authoritative.
        """
        catalog = self.catalog.get_stay_catalog(quote.stay_id)
        return price_quote_rooms(
            quote.rooms,
            {room.id: room for room in catalog.rooms},
            quote.sub_period_ids,
            catalog.age_ranges,
        )

    def _quote_to_item(self, quote: Quote) -> dict[str, Any]:
        item: dict[str, Any] = {
            "quote_id": quote.id,
            "quote_number": quote.quote_number,
            "stay_id": quote.stay_id,
            "first_name": quote.first_name,
            "last_name": quote.last_name,
            "email": quote.email,
            "phone": quote.phone,
            "check_in": quote.check_in.isoformat(),
            "check_out": quote.check_out.isoformat(),
            "status": quote.status.value,
            "total_price": quote.total_price,
            "participants": [p.model_dump() for p in quote.participants],
            "rooms": [r.model_dump() for r in quote.rooms],
            "sub_period_ids": list(quote.sub_period_ids),
            "created_at": quote.created_at.isoformat(),
        }
        if quote.special_requests:
            item["special_requests"] = quote.special_requests
        return item

    def _item_to_quote(self, item: dict[str, Any]) -> Quote:
        return Quote(
            id=item["quote_id"],
            quote_number=item["quote_number"],
            stay_id=item["stay_id"],
            first_name=item["first_name"],
            last_name=item["last_name"],
            email=item["email"],
            phone=item["phone"],
            check_in=dt.date.fromisoformat(item["check_in"]),
            check_out=dt.date.fromisoformat(item["check_out"]),
            special_requests=item.get("special_requests"),
            status=QuoteStatus(item["status"]),
            # DynamoDB returns numbers as Decimal
            total_price=int(item["total_price"]),
            participants=[
                QuoteParticipant(age_range_id=p["age_range_id"], count=int(p["count"]))
                for p in item.get("participants", [])
            ],
            rooms=[
                QuoteRoom(
                    room_id=r["room_id"],
                    room_name=r["room_name"],
                    quantity=int(r["quantity"]),
                    occupants=[
                        QuoteRoomOccupant(age_range_id=o["age_range_id"], count=int(o["count"]))
                        for o in r.get("occupants", [])
                    ],
                )
                for r in item.get("rooms", [])
            ],
            sub_period_ids=list(item.get("sub_period_ids", [])),
            created_at=dt.datetime.fromisoformat(item["created_at"]),
        )
