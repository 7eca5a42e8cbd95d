#!/usr/bin/env python3
"""Seed a development database with a demo stay catalog.

Populates DynamoDB through CatalogService so the stored items have exactly the
shape the API reads:
- Three age ranges (adult, child, infant)
- A hotel with a double room and a single room, priced per age range
- A two-week summer stay with two weekly sub-periods and a week-1 discount

Usage:
    python backend/scripts/seed_data.py --env dev
    python backend/scripts/seed_data.py --env dev --clear-first
"""

import argparse
import datetime as dt
import os
import sys

from quotation.models import AgeRangeCreate, NewHotelDraft, NewStayDraft
from quotation.services.catalog import CatalogService
from quotation.services.dynamodb import DynamoDBService

# Tables and their partition keys, in the order they are cleared
CATALOG_TABLES: dict[str, str] = {
    CatalogService.ROOM_PRICINGS: "pricing_id",
    CatalogService.SUB_PERIODS: "sub_period_id",
    CatalogService.STAYS: "stay_id",
    CatalogService.ROOMS: "room_id",
    CatalogService.HOTELS: "hotel_id",
    CatalogService.AGE_RANGES: "age_range_id",
}


def seed_catalog(catalog: CatalogService, year: int = 2025) -> dict[str, str]:
    """Create the demo catalog.

    Prices are per person for the whole stay, in EUR cents.

    Returns:
        Generated IDs keyed by a short name (adult, double, stay, week_1, ...)
    """
    adult = catalog.create_age_range(AgeRangeCreate(name="Adult", min_age=18, order=0))
    child = catalog.create_age_range(
        AgeRangeCreate(name="Child", min_age=3, max_age=17, order=1)
    )
    infant = catalog.create_age_range(
        AgeRangeCreate(name="Infant", min_age=0, max_age=2, order=2)
    )

    hotel = catalog.create_hotel(
        NewHotelDraft(
            name="Hotel du Lac",
            description="Family hotel on the lake shore",
            address="1 Quai du Lac, 74000 Annecy",
        )
    )
    double = catalog.create_room(hotel.id, "Double", capacity=2, description="Lake view")
    single = catalog.create_room(hotel.id, "Single", capacity=1)
    catalog.set_room_price(double.id, adult.id, 10000)  # €100.00
    catalog.set_room_price(double.id, child.id, 5000)  # €50.00
    catalog.set_room_price(single.id, adult.id, 8000)  # €80.00

    stay = catalog.create_stay(
        NewStayDraft(
            name=f"Summer Retreat {year}",
            slug=f"summer-retreat-{year}",
            hotel_id=hotel.id,
            description="Two weeks by the lake, bookable by the week",
            start_date=dt.date(year, 6, 1),
            end_date=dt.date(year, 6, 15),
            allow_partial_booking=True,
            min_days=2,
            max_days=14,
        )
    )
    week_1 = catalog.create_sub_period(
        stay.id, "Week 1", dt.date(year, 6, 1), dt.date(year, 6, 8), order=0
    )
    week_2 = catalog.create_sub_period(
        stay.id, "Week 2", dt.date(year, 6, 8), dt.date(year, 6, 15), order=1
    )
    catalog.set_room_price(double.id, adult.id, 6000, sub_period_id=week_1.id)

    print(f"  Seeded stay '{stay.name}' ({stay.id}) at {hotel.name}")
    return {
        "adult": adult.id,
        "child": child.id,
        "infant": infant.id,
        "hotel": hotel.id,
        "double": double.id,
        "single": single.id,
        "stay": stay.id,
        "week_1": week_1.id,
        "week_2": week_2.id,
    }


def clear_catalog(db: DynamoDBService) -> int:
    """Delete every catalog item. Quotes are left untouched.

    Returns:
        Number of items deleted
    """
    deleted = 0
    for table, key_name in CATALOG_TABLES.items():
        for item in db.scan(table):
            db.delete_item(table, {key_name: item[key_name]})
            deleted += 1
        print(f"  Cleared {table}")
    return deleted


def main(argv: list[str] | None = None) -> int:
    """Run the seed script."""
    parser = argparse.ArgumentParser(description="Seed development database with a demo catalog")
    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        default="dev",
        help="Target environment (default: dev)",
    )
    parser.add_argument(
        "--region",
        default=os.environ.get("AWS_DEFAULT_REGION", "eu-west-1"),
        help="AWS region (default: eu-west-1 or AWS_DEFAULT_REGION env var)",
    )
    parser.add_argument(
        "--clear-first",
        action="store_true",
        help="Clear existing catalog data before seeding",
    )
    args = parser.parse_args(argv)

    if args.env == "prod":
        confirm = input("WARNING: You are about to modify PRODUCTION data. Type 'yes' to continue: ")
        if confirm.lower() != "yes":
            print("Aborted.")
            return 1

    # boto3 picks the region up from the environment
    os.environ["AWS_DEFAULT_REGION"] = args.region
    db = DynamoDBService(environment=args.env)
    print(f"\nSeeding {db.name_prefix} (region: {args.region})\n")

    if args.clear_first:
        print(f"  Deleted {clear_catalog(db)} items\n")

    seed_catalog(CatalogService(db=db))
    print("\nSeed completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
