"""FastAPI application for the stay quotation REST API.

This package provides REST endpoints for:
- Health checks
- Public stay catalog and live pricing
- Quote submission
- Back-office quote review and age range administration
"""

import os
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from api.exceptions import register_exception_handlers
from api.middleware.correlation import CorrelationIdMiddleware
from api.routes import (
    age_ranges_router,
    health_router,
    pricing_router,
    quotes_router,
    stays_router,
)
from quotation.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def cors_origins() -> list[str]:
    """Allowed CORS origins from CORS_ALLOW_ORIGINS (comma separated)."""
    raw = os.getenv("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(
    title="Stay Quotation API",
    description="REST API for stay catalogs, pricing and quote requests",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

# CloudFront routes /api/* to API Gateway
app.include_router(health_router, prefix="/api")
app.include_router(stays_router, prefix="/api")
app.include_router(pricing_router, prefix="/api")
app.include_router(quotes_router, prefix="/api")
app.include_router(age_ranges_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Root health check endpoint at /api/ping."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "quotation-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Reload mode needs an import string
        uvicorn.run(
            "api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["backend/api/src", "backend/shared/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
