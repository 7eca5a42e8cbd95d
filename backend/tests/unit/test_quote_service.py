"""Tests for QuoteService against mocked DynamoDB."""

import datetime as dt
import re
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from quotation.models import ErrorCode, NewStayDraft, QuoteError, QuoteStatus
from quotation.services.catalog import CatalogService
from quotation.services.quotes import QuoteService, generate_quote_number
from quotation.services.validation import QuoteValidator

from factories import FIXED_NOW, UNKNOWN_ID

Payload = Callable[..., dict[str, Any]]


def add_stay(catalog_service: CatalogService, seeded: SimpleNamespace, **overrides: Any) -> str:
    data: dict[str, Any] = {
        "name": "Other stay",
        "slug": "other-stay",
        "hotel_id": seeded.hotel_id,
        "start_date": dt.date(2025, 6, 1),
        "end_date": dt.date(2025, 6, 15),
    }
    data.update(overrides)
    return catalog_service.create_stay(NewStayDraft(**data)).id


class TestQuoteNumber:
    """Tests for quote number generation."""

    def test_format(self):
        number = generate_quote_number(dt.datetime(2025, 5, 20, 10, 30, 7, tzinfo=dt.UTC))

        assert number == "DEV-2025-007000"

    def test_year_follows_clock(self):
        assert generate_quote_number(FIXED_NOW).startswith("DEV-2025-")


class TestSubmitQuote:
    """Tests for successful submissions."""

    def test_prices_and_stores_pending_quote(
        self, quote_service: QuoteService, quote_payload: Payload
    ):
        quote, result = quote_service.submit_quote(quote_payload())

        assert result.is_valid
        assert quote is not None
        assert quote.total_price == 33000
        assert quote.status == QuoteStatus.PENDING
        assert re.fullmatch(r"DEV-2025-\d{6}", quote.quote_number)
        assert quote.created_at == FIXED_NOW
        assert quote.nights == 5

        assert quote_service.get_quote(quote.id) == quote

    def test_zero_counts_are_not_stored(
        self, quote_service: QuoteService, quote_payload: Payload, seeded_catalog: SimpleNamespace
    ):
        quote, _ = quote_service.submit_quote(quote_payload())

        assert quote is not None
        assert [p.age_range_id for p in quote.participants] == [
            seeded_catalog.adult_id,
            seeded_catalog.child_id,
        ]

    def test_sub_period_prices_apply(
        self, quote_service: QuoteService, quote_payload: Payload, seeded_catalog: SimpleNamespace
    ):
        quote, _ = quote_service.submit_quote(
            quote_payload(sub_period_ids=[seeded_catalog.week_1_id])
        )

        assert quote is not None
        # double: 2 x 6000 + 5000, single: 8000
        assert quote.total_price == 25000
        assert quote.sub_period_ids == [seeded_catalog.week_1_id]

    def test_unknown_sub_periods_are_dropped(
        self, quote_service: QuoteService, quote_payload: Payload
    ):
        quote, _ = quote_service.submit_quote(quote_payload(sub_period_ids=[UNKNOWN_ID]))

        assert quote is not None
        assert quote.sub_period_ids == []
        assert quote.total_price == 33000

    def test_without_rooms_total_is_zero(
        self, quote_service: QuoteService, quote_payload: Payload
    ):
        payload = quote_payload()
        del payload["rooms"]

        quote, _ = quote_service.submit_quote(payload)

        assert quote is not None
        assert quote.total_price == 0
        assert quote.rooms == []

    def test_total_is_frozen(
        self,
        quote_service: QuoteService,
        catalog_service: CatalogService,
        quote_payload: Payload,
        seeded_catalog: SimpleNamespace,
    ):
        quote, _ = quote_service.submit_quote(quote_payload())
        assert quote is not None

        catalog_service.set_room_price(seeded_catalog.single_id, seeded_catalog.adult_id, 9000)

        assert quote_service.get_quote(quote.id).total_price == 33000
        assert quote_service.reprice(quote) == 34000


class TestSubmitQuoteRejections:
    """Tests for submissions that are refused."""

    def test_invalid_payload_returns_violations(
        self, quote_service: QuoteService, quote_payload: Payload
    ):
        quote, result = quote_service.submit_quote(quote_payload(email="nope", first_name=""))

        assert quote is None
        assert set(result.fields()) == {"email", "first_name"}
        assert quote_service.list_quotes() == []

    def test_unknown_stay(self, quote_service: QuoteService, quote_payload: Payload):
        with pytest.raises(QuoteError) as exc_info:
            quote_service.submit_quote(quote_payload(stay_id=UNKNOWN_ID))

        assert exc_info.value.code == ErrorCode.STAY_NOT_FOUND

    def test_inactive_stay(
        self,
        quote_service: QuoteService,
        catalog_service: CatalogService,
        quote_payload: Payload,
        seeded_catalog: SimpleNamespace,
    ):
        stay_id = add_stay(catalog_service, seeded_catalog, is_active=False, allow_partial_booking=True)

        with pytest.raises(QuoteError) as exc_info:
            quote_service.submit_quote(quote_payload(stay_id=stay_id))

        assert exc_info.value.code == ErrorCode.STAY_INACTIVE

    @pytest.mark.parametrize(
        ("check_in", "check_out", "code"),
        [
            ("2025-05-30", "2025-06-05", ErrorCode.DATES_OUTSIDE_STAY),
            ("2025-06-10", "2025-06-20", ErrorCode.DATES_OUTSIDE_STAY),
            ("2025-06-03", "2025-06-04", ErrorCode.MINIMUM_NIGHTS_NOT_MET),
            ("2025-06-01", "2025-06-13", ErrorCode.MAXIMUM_NIGHTS_EXCEEDED),
        ],
    )
    def test_date_rules(
        self,
        quote_service: QuoteService,
        quote_payload: Payload,
        check_in: str,
        check_out: str,
        code: ErrorCode,
    ):
        with pytest.raises(QuoteError) as exc_info:
            quote_service.submit_quote(quote_payload(check_in=check_in, check_out=check_out))

        assert exc_info.value.code == code

    def test_partial_booking_not_allowed(
        self,
        quote_service: QuoteService,
        catalog_service: CatalogService,
        quote_payload: Payload,
        seeded_catalog: SimpleNamespace,
    ):
        stay_id = add_stay(catalog_service, seeded_catalog)

        with pytest.raises(QuoteError) as exc_info:
            quote_service.submit_quote(quote_payload(stay_id=stay_id))
        assert exc_info.value.code == ErrorCode.PARTIAL_BOOKING_NOT_ALLOWED

        quote, _ = quote_service.submit_quote(
            quote_payload(stay_id=stay_id, check_in="2025-06-01", check_out="2025-06-15")
        )
        assert quote is not None

    def test_room_from_another_hotel(self, quote_service: QuoteService, quote_payload: Payload):
        payload = quote_payload(rooms=[{"room_id": UNKNOWN_ID, "quantity": 1}])

        with pytest.raises(QuoteError) as exc_info:
            quote_service.submit_quote(payload)

        assert exc_info.value.code == ErrorCode.ROOM_NOT_FOUND

    def test_capacity_enforced_when_enabled(
        self,
        dynamodb_service: Any,
        catalog_service: CatalogService,
        quote_payload: Payload,
    ):
        service = QuoteService(
            db=dynamodb_service,
            catalog=catalog_service,
            validator=QuoteValidator(enforce_capacity=True),
            clock=lambda: FIXED_NOW,
        )

        quote, result = service.submit_quote(quote_payload())

        assert quote is None
        assert result.fields() == ["rooms.0.occupants"]


class TestQuoteLifecycle:
    """Tests for reading, listing, status updates and deletion."""

    @pytest.fixture
    def stored_quote(self, quote_service: QuoteService, quote_payload: Payload):
        quote, _ = quote_service.submit_quote(quote_payload())
        assert quote is not None
        return quote

    def test_get_missing(self, quote_service: QuoteService, create_tables: Any):
        with pytest.raises(QuoteError) as exc_info:
            quote_service.get_quote(UNKNOWN_ID)

        assert exc_info.value.code == ErrorCode.QUOTE_NOT_FOUND

    def test_list_filters_by_status(self, quote_service: QuoteService, stored_quote):
        assert [q.id for q in quote_service.list_quotes()] == [stored_quote.id]
        assert quote_service.list_quotes(QuoteStatus.ACCEPTED) == []

    def test_list_newest_first(
        self,
        dynamodb_service: Any,
        catalog_service: CatalogService,
        quote_payload: Payload,
    ):
        clock = iter([FIXED_NOW, FIXED_NOW + dt.timedelta(hours=1)])
        service = QuoteService(
            db=dynamodb_service,
            catalog=catalog_service,
            validator=QuoteValidator(enforce_capacity=False),
            clock=lambda: next(clock),
        )
        first, _ = service.submit_quote(quote_payload())
        second, _ = service.submit_quote(quote_payload())
        assert first is not None and second is not None

        assert [q.id for q in service.list_quotes()] == [second.id, first.id]

    def test_update_status(self, quote_service: QuoteService, stored_quote):
        updated = quote_service.update_status(stored_quote.id, QuoteStatus.ACCEPTED)

        assert updated.status == QuoteStatus.ACCEPTED
        assert updated.total_price == stored_quote.total_price
        assert quote_service.get_quote(stored_quote.id).status == QuoteStatus.ACCEPTED

    def test_update_missing(self, quote_service: QuoteService, create_tables: Any):
        with pytest.raises(QuoteError) as exc_info:
            quote_service.update_status(UNKNOWN_ID, QuoteStatus.REJECTED)

        assert exc_info.value.code == ErrorCode.QUOTE_NOT_FOUND

    def test_delete(self, quote_service: QuoteService, stored_quote):
        quote_service.delete_quote(stored_quote.id)

        with pytest.raises(QuoteError):
            quote_service.get_quote(stored_quote.id)

    def test_delete_missing(self, quote_service: QuoteService, create_tables: Any):
        with pytest.raises(QuoteError) as exc_info:
            quote_service.delete_quote(UNKNOWN_ID)

        assert exc_info.value.code == ErrorCode.QUOTE_NOT_FOUND
