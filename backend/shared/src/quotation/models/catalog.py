"""Catalog models: age ranges, rooms and their per-age-range prices.

All amounts are integer EUR cents. A RoomPricing price covers one occupant
for the whole stay (or one sub-period), never a single night.
"""

import datetime as dt
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .hotel import PersistedStay


class AgeRangeCreate(BaseModel):
    """Data required to create an age range."""

    model_config = ConfigDict(strict=True)

    name: str = Field(..., min_length=1, max_length=255)
    min_age: int | None = Field(default=None, ge=0)
    max_age: int | None = Field(default=None, ge=0)
    order: int = Field(default=0, ge=0, description="Display and iteration order")

    @model_validator(mode="after")
    def check_bounds(self) -> "AgeRangeCreate":
        """Minimum age may not exceed maximum age."""
        if self.min_age is not None and self.max_age is not None:
            if self.min_age > self.max_age:
                raise ValueError("min_age cannot be greater than max_age")
        return self


class AgeRange(AgeRangeCreate):
    """A named age bracket used as a pricing dimension."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str = Field(..., description="Age range ID")

    def contains(self, age: int) -> bool:
        """Check whether an age falls within this bracket (bounds inclusive)."""
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True


class AgeRangeCatalog:
    """Read-only age ranges, iterated by ``order`` ascending.

    Ties on ``order`` keep the order in which the ranges were supplied.
    """

    def __init__(self, age_ranges: Iterable[AgeRange]) -> None:
        self._ranges = sorted(age_ranges, key=lambda r: r.order)
        self._by_id = {r.id: r for r in self._ranges}

    def __iter__(self) -> Iterator[AgeRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __contains__(self, age_range_id: object) -> bool:
        return age_range_id in self._by_id

    def get(self, age_range_id: str) -> AgeRange | None:
        """Look up an age range by ID."""
        return self._by_id.get(age_range_id)

    def ids(self) -> list[str]:
        """Age range IDs in catalog order."""
        return [r.id for r in self._ranges]

    def for_age(self, age: int) -> AgeRange | None:
        """First age range (in catalog order) containing the given age."""
        for age_range in self._ranges:
            if age_range.contains(age):
                return age_range
        return None


class RoomPricing(BaseModel):
    """Price of one occupant of an age range in a room.

    ``sub_period_id`` is None for the global (whole stay) price.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    room_id: str
    age_range_id: str
    price: int = Field(..., ge=0, description="Price per person in EUR cents")
    sub_period_id: str | None = None


class Room(BaseModel):
    """A room type of a hotel, with its price table."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    hotel_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    capacity: int = Field(..., gt=0, description="Maximum occupants per instance")
    image_url: str | None = None
    room_pricings: list[RoomPricing] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_pricings(self) -> "Room":
        """At most one price per (age range, sub-period) pair."""
        seen: set[tuple[str, str | None]] = set()
        for pricing in self.room_pricings:
            key = (pricing.age_range_id, pricing.sub_period_id)
            if key in seen:
                raise ValueError(
                    f"Duplicate price for age range {pricing.age_range_id} "
                    f"in room {self.id}"
                )
            seen.add(key)
        return self

    def price_for(self, age_range_id: str, sub_period_id: str | None = None) -> int | None:
        """Exact price row lookup, or None when no price is configured."""
        for pricing in self.room_pricings:
            if pricing.age_range_id == age_range_id and pricing.sub_period_id == sub_period_id:
                return pricing.price
        return None


class SubPeriod(BaseModel):
    """A named slice of a stay that can carry its own prices."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    stay_id: str
    name: str = Field(..., min_length=1)
    start_date: dt.date
    end_date: dt.date
    order: int = Field(default=0, ge=0)


class StayCatalog(BaseModel):
    """Read-only snapshot of everything needed to price quotes for one stay."""

    model_config = ConfigDict(strict=True, frozen=True, arbitrary_types_allowed=True)

    stay: PersistedStay
    rooms: list[Room] = Field(default_factory=list)
    age_ranges: AgeRangeCatalog
    sub_periods: list[SubPeriod] = Field(default_factory=list)

    def room(self, room_id: str) -> Room | None:
        """Look up a room of this stay by ID."""
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def sub_periods_by_id(self, sub_period_ids: Iterable[str]) -> list[SubPeriod]:
        """Resolve sub-period IDs, in stay order, skipping unknown IDs."""
        wanted = set(sub_period_ids)
        ordered = sorted(self.sub_periods, key=lambda p: (p.order, p.start_date))
        return [p for p in ordered if p.id in wanted]
