"""Catalog service: age ranges, hotels, rooms, prices, stays and sub-periods.

Loads immutable catalog snapshots for the pricing engine. The engine itself
never fetches anything; callers load a StayCatalog here and pass it in.
"""

import datetime as dt
import uuid
from typing import TYPE_CHECKING, Any

from quotation.models import (
    AgeRange,
    AgeRangeCatalog,
    AgeRangeCreate,
    ErrorCode,
    NewHotelDraft,
    NewStayDraft,
    PersistedHotel,
    PersistedStay,
    QuoteError,
    Room,
    RoomPricing,
    StayCatalog,
    SubPeriod,
)
from quotation.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

GLOBAL_PRICING_KEY = "global"


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _as_bool(value: Any, default: bool = True) -> bool:
    # DynamoDB items written by hand may store booleans as strings
    if value is None:
        return default
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def _without_none(item: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in item.items() if v is not None}


def pricing_id_for(room_id: str, age_range_id: str, sub_period_id: str | None = None) -> str:
    """Deterministic pricing key, one row per (room, age range, sub-period)."""
    return f"{room_id}#{age_range_id}#{sub_period_id or GLOBAL_PRICING_KEY}"


class CatalogService:
    """Service for reading and seeding the quotation catalog."""

    AGE_RANGES = "age-ranges"
    HOTELS = "hotels"
    ROOMS = "rooms"
    ROOM_PRICINGS = "room-pricings"
    STAYS = "stays"
    SUB_PERIODS = "sub-periods"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize catalog service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    # =========================================================================
    # Age ranges
    # =========================================================================

    def list_age_ranges(self) -> AgeRangeCatalog:
        """All age ranges, ordered by display order."""
        items = self.db.scan(self.AGE_RANGES)
        return AgeRangeCatalog(self._item_to_age_range(item) for item in items)

    def get_age_range(self, age_range_id: str) -> AgeRange | None:
        item = self.db.get_item(self.AGE_RANGES, {"age_range_id": age_range_id})
        return self._item_to_age_range(item) if item else None

    def create_age_range(self, data: AgeRangeCreate) -> AgeRange:
        """Store a new age range with a generated ID."""
        age_range = AgeRange(id=str(uuid.uuid4()), **data.model_dump())
        self.db.put_item(
            self.AGE_RANGES,
            _without_none(
                {
                    "age_range_id": age_range.id,
                    "name": age_range.name,
                    "min_age": age_range.min_age,
                    "max_age": age_range.max_age,
                    "display_order": age_range.order,
                }
            ),
            condition_expression="attribute_not_exists(age_range_id)",
        )
        logger.info("Created age range %s (%s)", age_range.id, age_range.name)
        return age_range

    def delete_age_range(self, age_range_id: str) -> None:
        """Delete an age range that no room price references.

        Raises:
            QuoteError: AGE_RANGE_NOT_FOUND or AGE_RANGE_IN_USE.
        """
        if self.get_age_range(age_range_id) is None:
            raise QuoteError(ErrorCode.AGE_RANGE_NOT_FOUND, {"age_range_id": age_range_id})

        references = self.db.query_by_gsi(
            table=self.ROOM_PRICINGS,
            index_name="age_range_id-index",
            partition_key_name="age_range_id",
            partition_key_value=age_range_id,
        )
        if references:
            raise QuoteError(
                ErrorCode.AGE_RANGE_IN_USE,
                {"age_range_id": age_range_id, "references": str(len(references))},
            )

        self.db.delete_item(self.AGE_RANGES, {"age_range_id": age_range_id})
        logger.info("Deleted age range %s", age_range_id)

    # =========================================================================
    # Hotels and rooms
    # =========================================================================

    def create_hotel(self, draft: NewHotelDraft) -> PersistedHotel:
        """Store a hotel draft and return it with its identity."""
        hotel = PersistedHotel.from_draft(
            draft, hotel_id=str(uuid.uuid4()), now=dt.datetime.now(dt.UTC)
        )
        self.db.put_item(
            self.HOTELS,
            _without_none(
                {
                    "hotel_id": hotel.id,
                    "name": hotel.name,
                    "description": hotel.description,
                    "address": hotel.address,
                    "image_url": hotel.image_url,
                    "created_at": hotel.created_at.isoformat(),
                    "updated_at": hotel.updated_at.isoformat(),
                }
            ),
        )
        return hotel

    def create_room(
        self,
        hotel_id: str,
        name: str,
        capacity: int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Room:
        """Store a new room type without prices."""
        room = Room(
            id=str(uuid.uuid4()),
            hotel_id=hotel_id,
            name=name,
            capacity=capacity,
            description=description,
            image_url=image_url,
        )
        self.db.put_item(
            self.ROOMS,
            _without_none(
                {
                    "room_id": room.id,
                    "hotel_id": room.hotel_id,
                    "name": room.name,
                    "capacity": room.capacity,
                    "description": room.description,
                    "image_url": room.image_url,
                }
            ),
        )
        return room

    def set_room_price(
        self,
        room_id: str,
        age_range_id: str,
        price: int,
        sub_period_id: str | None = None,
    ) -> RoomPricing:
        """Create or replace the price of an age range in a room.

        Raises:
            QuoteError: AGE_RANGE_NOT_FOUND if the age range does not exist.
            pydantic.ValidationError: If the price is negative.
        """
        if self.get_age_range(age_range_id) is None:
            raise QuoteError(ErrorCode.AGE_RANGE_NOT_FOUND, {"age_range_id": age_range_id})
        pricing = RoomPricing(
            id=pricing_id_for(room_id, age_range_id, sub_period_id),
            room_id=room_id,
            age_range_id=age_range_id,
            price=price,
            sub_period_id=sub_period_id,
        )
        self.db.put_item(
            self.ROOM_PRICINGS,
            _without_none(
                {
                    "pricing_id": pricing.id,
                    "room_id": pricing.room_id,
                    "age_range_id": pricing.age_range_id,
                    "price": pricing.price,
                    "sub_period_id": pricing.sub_period_id,
                }
            ),
        )
        return pricing

    def get_rooms_for_hotel(self, hotel_id: str) -> list[Room]:
        """Rooms of a hotel with their price tables, ordered by name."""
        room_items = self.db.query_by_gsi(
            table=self.ROOMS,
            index_name="hotel_id-index",
            partition_key_name="hotel_id",
            partition_key_value=hotel_id,
        )
        rooms = [self._item_to_room(item, self._get_room_pricings(item["room_id"])) for item in room_items]
        return sorted(rooms, key=lambda r: r.name)

    def _get_room_pricings(self, room_id: str) -> list[RoomPricing]:
        items = self.db.query_by_gsi(
            table=self.ROOM_PRICINGS,
            index_name="room_id-index",
            partition_key_name="room_id",
            partition_key_value=room_id,
        )
        return [self._item_to_room_pricing(item) for item in items]

    # =========================================================================
    # Stays
    # =========================================================================

    def create_stay(self, draft: NewStayDraft) -> PersistedStay:
        """Store a stay draft and return it with its identity."""
        stay = PersistedStay.from_draft(draft, stay_id=str(uuid.uuid4()))
        self.db.put_item(self.STAYS, self._stay_to_item(stay))
        return stay

    def create_sub_period(
        self,
        stay_id: str,
        name: str,
        start_date: dt.date,
        end_date: dt.date,
        order: int = 0,
    ) -> SubPeriod:
        """Store a sub-period of a stay."""
        sub_period = SubPeriod(
            id=str(uuid.uuid4()),
            stay_id=stay_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            order=order,
        )
        self.db.put_item(
            self.SUB_PERIODS,
            {
                "sub_period_id": sub_period.id,
                "stay_id": sub_period.stay_id,
                "name": sub_period.name,
                "start_date": sub_period.start_date.isoformat(),
                "end_date": sub_period.end_date.isoformat(),
                "display_order": sub_period.order,
            },
        )
        return sub_period

    def get_stay(self, stay_id: str) -> PersistedStay | None:
        item = self.db.get_item(self.STAYS, {"stay_id": stay_id})
        return self._item_to_stay(item) if item else None

    def list_active_stays(self) -> list[PersistedStay]:
        """Active stays sorted by start date."""
        stays = [self._item_to_stay(item) for item in self.db.scan(self.STAYS)]
        return sorted((s for s in stays if s.is_active), key=lambda s: s.start_date)

    def get_sub_periods(self, stay_id: str) -> list[SubPeriod]:
        """Sub-periods of a stay ordered by display order, then start date."""
        items = self.db.query_by_gsi(
            table=self.SUB_PERIODS,
            index_name="stay_id-index",
            partition_key_name="stay_id",
            partition_key_value=stay_id,
        )
        periods = [self._item_to_sub_period(item) for item in items]
        return sorted(periods, key=lambda p: (p.order, p.start_date))

    def get_stay_catalog(self, stay_id: str) -> StayCatalog:
        """Load the full pricing snapshot of a stay.

        Raises:
            QuoteError: STAY_NOT_FOUND if the stay does not exist.
        """
        stay = self.get_stay(stay_id)
        if stay is None:
            raise QuoteError(ErrorCode.STAY_NOT_FOUND, {"stay_id": stay_id})

        return StayCatalog(
            stay=stay,
            rooms=self.get_rooms_for_hotel(stay.hotel_id),
            age_ranges=self.list_age_ranges(),
            sub_periods=self.get_sub_periods(stay_id),
        )

    # =========================================================================
    # Item conversion
    # =========================================================================

    def _item_to_age_range(self, item: dict[str, Any]) -> AgeRange:
        return AgeRange(
            id=item["age_range_id"],
            name=item["name"],
            min_age=_optional_int(item.get("min_age")),
            max_age=_optional_int(item.get("max_age")),
            order=int(item.get("display_order", 0)),
        )

    def _item_to_room_pricing(self, item: dict[str, Any]) -> RoomPricing:
        return RoomPricing(
            id=item["pricing_id"],
            room_id=item["room_id"],
            age_range_id=item["age_range_id"],
            price=int(item["price"]),
            sub_period_id=item.get("sub_period_id"),
        )

    def _item_to_room(self, item: dict[str, Any], pricings: list[RoomPricing]) -> Room:
        return Room(
            id=item["room_id"],
            hotel_id=item["hotel_id"],
            name=item["name"],
            description=item.get("description"),
            capacity=int(item["capacity"]),
            image_url=item.get("image_url"),
            room_pricings=pricings,
        )

    def _item_to_sub_period(self, item: dict[str, Any]) -> SubPeriod:
        return SubPeriod(
            id=item["sub_period_id"],
            stay_id=item["stay_id"],
            name=item["name"],
            start_date=dt.date.fromisoformat(item["start_date"]),
            end_date=dt.date.fromisoformat(item["end_date"]),
            order=int(item.get("display_order", 0)),
        )

    def _stay_to_item(self, stay: PersistedStay) -> dict[str, Any]:
        return _without_none(
            {
                "stay_id": stay.id,
                "hotel_id": stay.hotel_id,
                "name": stay.name,
                "slug": stay.slug,
                "description": stay.description,
                "start_date": stay.start_date.isoformat(),
                "end_date": stay.end_date.isoformat(),
                "allow_partial_booking": stay.allow_partial_booking,
                "min_days": stay.min_days,
                "max_days": stay.max_days,
                "is_active": stay.is_active,
                "image_url": stay.image_url,
            }
        )

    def _item_to_stay(self, item: dict[str, Any]) -> PersistedStay:
        return PersistedStay(
            id=item["stay_id"],
            hotel_id=item["hotel_id"],
            name=item["name"],
            slug=item["slug"],
            description=item.get("description"),
            start_date=dt.date.fromisoformat(item["start_date"]),
            end_date=dt.date.fromisoformat(item["end_date"]),
            allow_partial_booking=_as_bool(item.get("allow_partial_booking"), default=False),
            min_days=_optional_int(item.get("min_days")),
            max_days=_optional_int(item.get("max_days")),
            is_active=_as_bool(item.get("is_active"), default=True),
            image_url=item.get("image_url"),
        )
