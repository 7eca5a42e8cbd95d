"""API routes package.

Routers are organized by domain:

- health: Health check endpoints
- stays: Public stay catalog
- pricing: Live pricing of room selections
- quotes: Quote submission and review
- age_ranges: Age range administration

All routers are registered in main.py with /api prefix.
"""

from api.routes.age_ranges import router as age_ranges_router
from api.routes.health import router as health_router
from api.routes.pricing import router as pricing_router
from api.routes.quotes import router as quotes_router
from api.routes.stays import router as stays_router

__all__ = [
    "age_ranges_router",
    "health_router",
    "pricing_router",
    "quotes_router",
    "stays_router",
]
