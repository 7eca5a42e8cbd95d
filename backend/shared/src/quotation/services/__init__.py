"""Backend services for stay quotation."""

from .catalog import CatalogService
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .quotes import QuoteService
from .validation import QuoteValidator

__all__ = [
    "CatalogService",
    "DynamoDBService",
    "get_dynamodb_service",
    "reset_dynamodb_service",
    "QuoteService",
    "QuoteValidator",
]
