"""Pytest configuration and fixtures for stay quotation backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- In-memory catalog snapshots for the pricing engine
- A seeded DynamoDB catalog for service and API tests
"""

import datetime as dt
import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set before any service is created so table names resolve to the test prefix
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-quotes")
os.environ.setdefault("ENFORCE_ROOM_CAPACITY", "false")

if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from quotation.models import (  # noqa: E402
    AgeRange,
    AgeRangeCatalog,
    AgeRangeCreate,
    NewHotelDraft,
    NewStayDraft,
    PersistedStay,
    Room,
    RoomPricing,
    StayCatalog,
    SubPeriod,
)

from factories import (  # noqa: E402
    ADULT_ID,
    CHILD_ID,
    DOUBLE_ROOM_ID,
    FIXED_NOW,
    HOTEL_ID,
    INFANT_ID,
    SINGLE_ROOM_ID,
    STAY_ID,
    WEEK_1_ID,
    WEEK_2_ID,
)


# === DynamoDB Fixtures ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset cached services and the DynamoDB singleton around each test.

    Tests using mock_aws then get a fresh service created inside the mock
    context instead of one left over from a previous test.
    """
    from api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


def _table(name: str, key: str, indexes: tuple[str, ...] = ()) -> dict[str, Any]:
    config: dict[str, Any] = {
        "TableName": f"test-quotes-{name}",
        "KeySchema": [{"AttributeName": key, "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": key, "AttributeType": "S"}]
        + [{"AttributeName": attr, "AttributeType": "S"} for attr in indexes],
        "BillingMode": "PAY_PER_REQUEST",
    }
    if indexes:
        config["GlobalSecondaryIndexes"] = [
            {
                "IndexName": f"{attr}-index",
                "KeySchema": [{"AttributeName": attr, "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            }
            for attr in indexes
        ]
    return config


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create all required DynamoDB tables for testing."""
    tables = [
        _table("age-ranges", "age_range_id"),
        _table("hotels", "hotel_id"),
        _table("rooms", "room_id", ("hotel_id",)),
        _table("room-pricings", "pricing_id", ("room_id", "age_range_id")),
        _table("stays", "stay_id", ("hotel_id",)),
        _table("sub-periods", "sub_period_id", ("stay_id",)),
        _table("quotes", "quote_id", ("stay_id",)),
    ]
    for table_config in tables:
        dynamodb_client.create_table(**table_config)


@pytest.fixture
def dynamodb_service(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from quotation.services.dynamodb import DynamoDBService

    return DynamoDBService(environment="test")


@pytest.fixture
def catalog_service(dynamodb_service: Any) -> Any:
    from quotation.services.catalog import CatalogService

    return CatalogService(db=dynamodb_service)


@pytest.fixture
def quote_service(dynamodb_service: Any, catalog_service: Any) -> Any:
    """QuoteService with a fixed clock and capacity rule off."""
    from quotation.services.quotes import QuoteService
    from quotation.services.validation import QuoteValidator

    return QuoteService(
        db=dynamodb_service,
        catalog=catalog_service,
        validator=QuoteValidator(enforce_capacity=False),
        clock=lambda: FIXED_NOW,
    )


# === In-memory catalog fixtures ===


@pytest.fixture
def age_ranges() -> AgeRangeCatalog:
    """Adult, child and infant age ranges, supplied out of order."""
    return AgeRangeCatalog(
        [
            AgeRange(id=INFANT_ID, name="Infant", min_age=0, max_age=2, order=2),
            AgeRange(id=ADULT_ID, name="Adult", min_age=18, max_age=None, order=0),
            AgeRange(id=CHILD_ID, name="Child", min_age=3, max_age=17, order=1),
        ]
    )


@pytest.fixture
def double_room() -> Room:
    """Double room: adult 100.00, child 50.00, no infant price.

    Adults pay 60.00 in the first week sub-period.
    """
    return Room(
        id=DOUBLE_ROOM_ID,
        hotel_id=HOTEL_ID,
        name="Double",
        capacity=2,
        room_pricings=[
            RoomPricing(id="p-1", room_id=DOUBLE_ROOM_ID, age_range_id=ADULT_ID, price=10000),
            RoomPricing(id="p-2", room_id=DOUBLE_ROOM_ID, age_range_id=CHILD_ID, price=5000),
            RoomPricing(
                id="p-3",
                room_id=DOUBLE_ROOM_ID,
                age_range_id=ADULT_ID,
                price=6000,
                sub_period_id=WEEK_1_ID,
            ),
        ],
    )


@pytest.fixture
def single_room() -> Room:
    """Single room: adult 80.00."""
    return Room(
        id=SINGLE_ROOM_ID,
        hotel_id=HOTEL_ID,
        name="Single",
        capacity=1,
        room_pricings=[
            RoomPricing(id="p-4", room_id=SINGLE_ROOM_ID, age_range_id=ADULT_ID, price=8000),
        ],
    )


@pytest.fixture
def stay() -> PersistedStay:
    """Two-week June stay that allows partial booking of 2 to 14 nights."""
    return PersistedStay(
        id=STAY_ID,
        hotel_id=HOTEL_ID,
        name="Summer Retreat",
        slug="summer-retreat",
        start_date=dt.date(2025, 6, 1),
        end_date=dt.date(2025, 6, 15),
        allow_partial_booking=True,
        min_days=2,
        max_days=14,
    )


@pytest.fixture
def stay_catalog(
    stay: PersistedStay, double_room: Room, single_room: Room, age_ranges: AgeRangeCatalog
) -> StayCatalog:
    return StayCatalog(
        stay=stay,
        rooms=[double_room, single_room],
        age_ranges=age_ranges,
        sub_periods=[
            SubPeriod(
                id=WEEK_2_ID,
                stay_id=STAY_ID,
                name="Week 2",
                start_date=dt.date(2025, 6, 8),
                end_date=dt.date(2025, 6, 15),
                order=1,
            ),
            SubPeriod(
                id=WEEK_1_ID,
                stay_id=STAY_ID,
                name="Week 1",
                start_date=dt.date(2025, 6, 1),
                end_date=dt.date(2025, 6, 8),
                order=0,
            ),
        ],
    )


# === Seeded DynamoDB catalog ===


@pytest.fixture
def seeded_catalog(catalog_service: Any) -> SimpleNamespace:
    """Store a hotel with two rooms, three age ranges, a stay and sub-periods.

    Returns the generated identifiers.
    """
    adult = catalog_service.create_age_range(
        AgeRangeCreate(name="Adult", min_age=18, order=0)
    )
    child = catalog_service.create_age_range(
        AgeRangeCreate(name="Child", min_age=3, max_age=17, order=1)
    )
    infant = catalog_service.create_age_range(
        AgeRangeCreate(name="Infant", min_age=0, max_age=2, order=2)
    )
    hotel = catalog_service.create_hotel(
        NewHotelDraft(name="Hotel du Lac", address="1 Quai du Lac, Annecy")
    )
    double = catalog_service.create_room(hotel.id, "Double", capacity=2)
    single = catalog_service.create_room(hotel.id, "Single", capacity=1)
    catalog_service.set_room_price(double.id, adult.id, 10000)
    catalog_service.set_room_price(double.id, child.id, 5000)
    catalog_service.set_room_price(single.id, adult.id, 8000)

    stay = catalog_service.create_stay(
        NewStayDraft(
            name="Summer Retreat",
            slug="Summer Retreat",
            hotel_id=hotel.id,
            start_date=dt.date(2025, 6, 1),
            end_date=dt.date(2025, 6, 15),
            allow_partial_booking=True,
            min_days=2,
            max_days=10,
        )
    )
    week_1 = catalog_service.create_sub_period(
        stay.id, "Week 1", dt.date(2025, 6, 1), dt.date(2025, 6, 8), order=0
    )
    week_2 = catalog_service.create_sub_period(
        stay.id, "Week 2", dt.date(2025, 6, 8), dt.date(2025, 6, 15), order=1
    )
    catalog_service.set_room_price(double.id, adult.id, 6000, sub_period_id=week_1.id)

    return SimpleNamespace(
        adult_id=adult.id,
        child_id=child.id,
        infant_id=infant.id,
        hotel_id=hotel.id,
        double_id=double.id,
        single_id=single.id,
        stay_id=stay.id,
        week_1_id=week_1.id,
        week_2_id=week_2.id,
    )


@pytest.fixture
def quote_payload(seeded_catalog: SimpleNamespace) -> Callable[..., dict[str, Any]]:
    """Factory for a valid submission against the seeded catalog.

    Keyword arguments override top-level fields.
    """

    def _payload(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "stay_id": seeded_catalog.stay_id,
            "first_name": "Marie",
            "last_name": "Dupont",
            "email": "marie@example.com",
            "phone": "+33612345678",
            "check_in": "2025-06-03",
            "check_out": "2025-06-08",
            "participants": [
                {"age_range_id": seeded_catalog.adult_id, "count": 3},
                {"age_range_id": seeded_catalog.child_id, "count": 1},
                {"age_range_id": seeded_catalog.infant_id, "count": 0},
            ],
            "rooms": [
                {
                    "room_id": seeded_catalog.double_id,
                    "quantity": 1,
                    "occupants": [
                        {"age_range_id": seeded_catalog.adult_id, "count": 2},
                        {"age_range_id": seeded_catalog.child_id, "count": 1},
                    ],
                },
                {
                    "room_id": seeded_catalog.single_id,
                    "quantity": 1,
                    "occupants": [{"age_range_id": seeded_catalog.adult_id, "count": 1}],
                },
            ],
        }
        payload.update(overrides)
        return payload

    return _payload


# === Helper Fixtures ===


@pytest.fixture
def freeze_time() -> dt.datetime:
    """Fixed datetime used as the quote service clock."""
    return FIXED_NOW


# === API Fixtures ===


@pytest.fixture
def api_client(catalog_service: Any, quote_service: Any) -> Generator[Any, None, None]:
    """TestClient whose services use the mocked DynamoDB tables."""
    from fastapi.testclient import TestClient

    from api.dependencies import get_catalog_service, get_quote_service
    from api.main import app

    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_quote_service] = lambda: quote_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers API Gateway adds after validating a back-office JWT."""
    return {"x-user-sub": "admin-sub-123"}
