"""FastAPI dependency injection providers for quotation services.

Services are created lazily and cached with @lru_cache, so every request
shares the same instances.

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── CatalogService
        │       └── QuoteService
        └── QuoteService
    QuoteValidator (configured from ENFORCE_ROOM_CAPACITY)
        └── QuoteService

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from quotation.services.catalog import CatalogService
from quotation.services.dynamodb import get_dynamodb_service
from quotation.services.quotes import QuoteService
from quotation.services.validation import QuoteValidator


@lru_cache
def get_catalog_service() -> CatalogService:
    """Get cached CatalogService instance."""
    return CatalogService(db=get_dynamodb_service())


@lru_cache
def get_quote_validator() -> QuoteValidator:
    """Get cached QuoteValidator instance."""
    return QuoteValidator()


@lru_cache
def get_quote_service() -> QuoteService:
    """Get cached QuoteService instance.

    Returns:
        QuoteService configured with DynamoDB, catalog and validator.
    """
    return QuoteService(
        db=get_dynamodb_service(),
        catalog=get_catalog_service(),
        validator=get_quote_validator(),
    )


def reset_services() -> None:
    """Clear all cached service instances.

    Also resets the underlying DynamoDB singleton.

    Example:
        @pytest.fixture(autouse=True)
        def reset_state():
            yield
            reset_services()
    """
    from quotation.services.dynamodb import reset_dynamodb_service

    get_catalog_service.cache_clear()
    get_quote_validator.cache_clear()
    get_quote_service.cache_clear()

    reset_dynamodb_service()
