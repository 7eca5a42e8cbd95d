"""Pricing engine for quotes.

Pure functions over an already-loaded catalog. Nothing here performs I/O or
keeps state, so the same catalog snapshot can be priced from any request.

Prices are integer EUR cents and cover one occupant for the whole stay, so no
per-night multiplication is applied. An occupant whose age range has no
configured price for the room contributes zero. Unknown age range IDs are
treated the same way.
"""

from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from quotation.models import (
    AgeRangeCatalog,
    ErrorCode,
    PriceBreakdownLine,
    PricingComputationError,
    QuoteError,
    QuoteRoom,
    Room,
    RoomInstance,
    RoomSelection,
    StayCatalog,
    add_room,
    set_occupant_count,
)


def _checked(price: int | None, room: Room) -> int | None:
    if price is not None and price < 0:
        raise PricingComputationError(
            f"Negative price {price} configured for room {room.id}", room_id=room.id
        )
    return price


def price_per_person(
    room: Room,
    age_range_id: str,
    sub_period_ids: Sequence[str] = (),
) -> int | None:
    """Price of one occupant of an age range for the selected period.

    Without sub-periods this is the room's global price. With sub-periods,
    the price of each selected sub-period is summed, falling back to the
    global price for sub-periods without a specific price.

    Returns:
        Price in cents, or None when no price is configured at all.

    Raises:
        PricingComputationError: If a negative price is configured.
    """
    global_price = _checked(room.price_for(age_range_id), room)
    if not sub_period_ids:
        return global_price

    total = 0
    found = False
    for sub_period_id in sub_period_ids:
        price = _checked(room.price_for(age_range_id, sub_period_id), room)
        if price is None:
            price = global_price
        if price is not None:
            total += price
            found = True
    return total if found else None


def instance_price(
    room: Room,
    instance: RoomInstance,
    sub_period_ids: Sequence[str] = (),
    age_ranges: AgeRangeCatalog | None = None,
) -> int:
    """Total price of one room instance.

    Sum of price x count over every occupied age range. Age ranges without a
    configured price contribute zero. When ``age_ranges`` is given, occupants
    of age ranges outside it contribute zero too, matching ``price_breakdown``.

    Raises:
        PricingComputationError: On negative prices or occupant counts.
    """
    total = 0
    for age_range_id, count in instance.occupants.items():
        if count < 0:
            raise PricingComputationError(
                f"Negative occupant count for age range {age_range_id}", room_id=room.id
            )
        if count == 0:
            continue
        if age_ranges is not None and age_range_id not in age_ranges:
            continue
        price = price_per_person(room, age_range_id, sub_period_ids)
        if price is not None:
            total += price * count
    return total


def total_price(
    selections: Iterable[RoomSelection],
    sub_period_ids: Sequence[str] = (),
    age_ranges: AgeRangeCatalog | None = None,
) -> int:
    """Sum of instance prices over every instance of every selection."""
    return sum(
        instance_price(selection.room, instance, sub_period_ids, age_ranges)
        for selection in selections
        for instance in selection.instances
    )


def price_breakdown(
    room: Room,
    instance: RoomInstance,
    age_ranges: AgeRangeCatalog,
    sub_period_ids: Sequence[str] = (),
) -> list[PriceBreakdownLine]:
    """Itemized price of one room instance, in age range catalog order.

    Only age ranges with a positive count and a configured price get a line,
    so the subtotals always add up to ``instance_price`` for the same input.
    """
    lines: list[PriceBreakdownLine] = []
    for age_range in age_ranges:
        count = instance.occupants.get(age_range.id, 0)
        if count <= 0:
            continue
        price = price_per_person(room, age_range.id, sub_period_ids)
        if price is None:
            continue
        lines.append(
            PriceBreakdownLine(
                age_range_id=age_range.id,
                age_range_name=age_range.name,
                count=count,
                price_per_person=price,
                subtotal=price * count,
            )
        )
    return lines


def price_quote_rooms(
    quote_rooms: Iterable[QuoteRoom],
    rooms_by_id: Mapping[str, Room],
    sub_period_ids: Sequence[str] = (),
    age_ranges: AgeRangeCatalog | None = None,
) -> int:
    """Price stored quote rooms with their occupants.

    Quote rooms whose room is no longer in the catalog contribute zero.
    """
    total = 0
    for quote_room in quote_rooms:
        room = rooms_by_id.get(quote_room.room_id)
        if room is None:
            continue
        occupants: dict[str, int] = {}
        for occupant in quote_room.occupants:
            occupants[occupant.age_range_id] = occupants.get(occupant.age_range_id, 0) + occupant.count
        instance = RoomInstance(id=quote_room.room_id, occupants=occupants)
        total += instance_price(room, instance, sub_period_ids, age_ranges)
    return total


def average_price(age_range_id: str, rooms: Iterable[Room]) -> int:
    """Average global price of an age range across rooms, rounded half up.

    Returns 0 when no room has a price for the age range.
    """
    prices = [
        _checked(p.price, room)
        for room in rooms
        for p in room.room_pricings
        if p.age_range_id == age_range_id and p.sub_period_id is None
    ]
    if not prices:
        return 0
    average = Decimal(sum(prices)) / Decimal(len(prices))  # type: ignore[arg-type]
    return int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_selections(
    catalog: StayCatalog,
    requested_rooms: Iterable[tuple[str, Sequence[Mapping[str, int]]]],
) -> list[RoomSelection]:
    """Build room selections from requested occupants per instance.

    Args:
        catalog: Stay snapshot the rooms must belong to
        requested_rooms: (room_id, [occupants per instance]) pairs

    Raises:
        QuoteError: ROOM_NOT_FOUND for a room outside the stay hotel.
        ValueError: For a room without instances or a negative count.
    """
    selections: list[RoomSelection] = []
    for room_id, instances in requested_rooms:
        room = catalog.room(room_id)
        if room is None:
            raise QuoteError(ErrorCode.ROOM_NOT_FOUND, {"room_id": room_id})

        existing = next((s for s in selections if s.room_id == room_id), None)
        offset = len(existing.instances) if existing else 0
        selections = add_room(selections, room, len(instances), catalog.age_ranges)
        current = next(s for s in selections if s.room_id == room_id)
        for instance, occupants in zip(current.instances[offset:], instances, strict=True):
            for age_range_id, count in occupants.items():
                selections = set_occupant_count(
                    selections, room_id, instance.id, age_range_id, count
                )
    return selections
