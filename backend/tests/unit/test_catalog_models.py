"""Unit tests for catalog, hotel and stay models."""

import datetime as dt

import pytest
from pydantic import ValidationError

from quotation.models import (
    AgeRange,
    AgeRangeCatalog,
    AgeRangeCreate,
    NewHotelDraft,
    NewStayDraft,
    PersistedHotel,
    PersistedStay,
    Room,
    RoomPricing,
    StayCatalog,
    normalize_slug,
)

from factories import (
    ADULT_ID,
    CHILD_ID,
    DOUBLE_ROOM_ID,
    FIXED_NOW,
    HOTEL_ID,
    INFANT_ID,
    SINGLE_ROOM_ID,
    UNKNOWN_ID,
    WEEK_1_ID,
    WEEK_2_ID,
)


class TestAgeRangeCatalog:
    """Tests for ordering and lookup of age ranges."""

    def test_iterates_by_order(self, age_ranges: AgeRangeCatalog):
        assert age_ranges.ids() == [ADULT_ID, CHILD_ID, INFANT_ID]

    def test_ties_keep_supplied_order(self):
        catalog = AgeRangeCatalog(
            [
                AgeRange(id="b", name="B", order=1),
                AgeRange(id="a", name="A", order=1),
                AgeRange(id="c", name="C", order=0),
            ]
        )
        assert catalog.ids() == ["c", "b", "a"]

    def test_lookup(self, age_ranges: AgeRangeCatalog):
        assert age_ranges.get(CHILD_ID).name == "Child"
        assert age_ranges.get(UNKNOWN_ID) is None
        assert ADULT_ID in age_ranges
        assert len(age_ranges) == 3

    @pytest.mark.parametrize(
        ("age", "expected"),
        [(0, INFANT_ID), (2, INFANT_ID), (3, CHILD_ID), (17, CHILD_ID), (18, ADULT_ID), (90, ADULT_ID)],
    )
    def test_for_age(self, age_ranges: AgeRangeCatalog, age: int, expected: str):
        assert age_ranges.for_age(age).id == expected


class TestAgeRangeCreate:
    """Tests for age range admin rules."""

    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ValidationError, match="min_age cannot be greater than max_age"):
            AgeRangeCreate(name="Teen", min_age=18, max_age=12)

    def test_negative_order_rejected(self):
        with pytest.raises(ValidationError):
            AgeRangeCreate(name="Teen", order=-1)

    def test_open_bounds_allowed(self):
        age_range = AgeRangeCreate(name="Everyone")

        assert age_range.min_age is None and age_range.max_age is None


class TestRoom:
    """Tests for room price tables."""

    def test_price_for(self, double_room: Room):
        assert double_room.price_for(ADULT_ID) == 10000
        assert double_room.price_for(ADULT_ID, WEEK_1_ID) == 6000
        assert double_room.price_for(ADULT_ID, WEEK_2_ID) is None
        assert double_room.price_for(INFANT_ID) is None

    def test_duplicate_price_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate price"):
            Room(
                id=DOUBLE_ROOM_ID,
                hotel_id=HOTEL_ID,
                name="Double",
                capacity=2,
                room_pricings=[
                    RoomPricing(id="a", room_id=DOUBLE_ROOM_ID, age_range_id=ADULT_ID, price=1),
                    RoomPricing(id="b", room_id=DOUBLE_ROOM_ID, age_range_id=ADULT_ID, price=2),
                ],
            )

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            RoomPricing(id="a", room_id=DOUBLE_ROOM_ID, age_range_id=ADULT_ID, price=-1)

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            Room(id=SINGLE_ROOM_ID, hotel_id=HOTEL_ID, name="Single", capacity=0)


class TestStayCatalog:
    """Tests for stay snapshot lookups."""

    def test_room_lookup(self, stay_catalog: StayCatalog):
        assert stay_catalog.room(SINGLE_ROOM_ID).name == "Single"
        assert stay_catalog.room(UNKNOWN_ID) is None

    def test_sub_periods_in_stay_order(self, stay_catalog: StayCatalog):
        periods = stay_catalog.sub_periods_by_id([WEEK_2_ID, UNKNOWN_ID, WEEK_1_ID])

        assert [p.id for p in periods] == [WEEK_1_ID, WEEK_2_ID]

    def test_snapshot_is_frozen(self, stay_catalog: StayCatalog):
        with pytest.raises(ValidationError):
            stay_catalog.rooms = []  # type: ignore[misc]


class TestHotelDrafts:
    """Tests for hotel draft and persisted hotel."""

    def test_draft_has_no_identity(self):
        draft = NewHotelDraft(name="Hotel du Lac")

        assert not hasattr(draft, "id")
        assert not hasattr(draft, "update")

    def test_from_draft_and_update(self):
        draft = NewHotelDraft(name="Hotel du Lac", image_url="https://example.com/lac.jpg")
        hotel = PersistedHotel.from_draft(draft, hotel_id=HOTEL_ID, now=FIXED_NOW)

        later = FIXED_NOW + dt.timedelta(days=1)
        renamed = hotel.update(later, name="Hotel des Alpes")

        assert renamed.id == HOTEL_ID
        assert renamed.name == "Hotel des Alpes"
        assert renamed.created_at == FIXED_NOW
        assert renamed.updated_at == later
        assert hotel.name == "Hotel du Lac"

    def test_image_url_must_be_http(self):
        with pytest.raises(ValidationError, match="http"):
            NewHotelDraft(name="Hotel", image_url="ftp://example.com/a.jpg")


class TestStayDrafts:
    """Tests for stay rules."""

    def draft(self, **overrides) -> NewStayDraft:
        data = {
            "name": "Summer Retreat",
            "slug": "Été 2025 / Lac",
            "hotel_id": HOTEL_ID,
            "start_date": dt.date(2025, 6, 1),
            "end_date": dt.date(2025, 6, 15),
        }
        data.update(overrides)
        return NewStayDraft(**data)

    def test_slug_is_normalized(self):
        assert self.draft().slug == "-t--2025---lac"
        assert normalize_slug("Summer Retreat") == "summer-retreat"

    def test_duration(self):
        assert self.draft().duration == 14

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="start_date must be before end_date"):
            self.draft(end_date=dt.date(2025, 6, 1))

    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ValidationError, match="min_days cannot be greater than max_days"):
            self.draft(min_days=7, max_days=3)

    def test_min_longer_than_stay_rejected(self):
        with pytest.raises(ValidationError, match="min_days cannot exceed the stay duration"):
            self.draft(min_days=20)

    def test_persisted_stay_update(self):
        stay = PersistedStay.from_draft(self.draft(), stay_id="stay-1")
        closed = stay.update(is_active=False)

        assert stay.is_active is True
        assert closed.is_active is False
        assert closed.id == "stay-1"

    def test_update_revalidates(self):
        stay = PersistedStay.from_draft(self.draft(), stay_id="stay-1")

        with pytest.raises(ValidationError):
            stay.update(end_date=dt.date(2025, 5, 1))

    def test_contains_dates(self):
        stay = PersistedStay.from_draft(self.draft(), stay_id="stay-1")

        assert stay.contains_dates(dt.date(2025, 6, 1), dt.date(2025, 6, 15))
        assert not stay.contains_dates(dt.date(2025, 5, 31), dt.date(2025, 6, 5))
