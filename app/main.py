# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the CosmOracle API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    CosmOracleException,
    cosmoracle_exception_handler,
    validation_exception_handler,
)
from app.routers import admin, bookings, contact, health, plans, relay, reviews

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

RELAY_PREFIX = "/functions/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup. The Supabase client is
    created lazily on first use.
    """
    logger.info(f"Starting CosmOracle API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.email_enabled:
        logger.info("RESEND_API_KEY not set - booking emails disabled, WhatsApp links only")

    yield

    logger.info("Shutting down CosmOracle API")


# Create FastAPI application
app = FastAPI(
    title="CosmOracle API",
    description="""
## Astrology Consultation Booking API

Backs the CosmOracle website: plan catalog, booking form with payment
screenshot upload, testimonial carousel, contact form and the booking
dashboard with CSV export.

### Booking Flow

1. **Pick a plan** - `GET /api/v1/bookings/form?plan=quick-clarity`
2. **Submit** - `POST /api/v1/bookings` (multipart, screenshot required)
3. **Confirmation** - navigate to the returned `redirect_url`

The operator is notified through `POST /functions/v1/send-booking-notification`
(WhatsApp deep link, plus email when configured).
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Bookings", "description": "Booking form and submission"},
        {"name": "Notifications", "description": "Booking notification relay"},
        {"name": "Reviews", "description": "Testimonials"},
        {"name": "Admin", "description": "Booking dashboard and CSV export"},
        {"name": "Plans", "description": "Consultation plan catalog"},
        {"name": "Contact", "description": "Contact form"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def relay_preflight_middleware(request: Request, call_next):
    """
    Answer relay preflights before CORSMiddleware sees them.

    The relay accepts any origin, even when the rest of the API is
    restricted to CORS_ORIGINS.
    """
    if request.method == "OPTIONS" and request.url.path == RELAY_PREFIX + relay.RELAY_PATH:
        return relay.preflight_response()
    return await call_next(request)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CosmOracleException)
async def handle_cosmoracle_exception(request: Request, exc: CosmOracleException):
    """Handle custom CosmOracle exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {getattr(exc, 'error', exc.message)}")
    return await cosmoracle_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Booking form and submission
app.include_router(
    bookings.router,
    prefix="/api/v1/bookings",
    tags=["Bookings"]
)

# Notification relay (hosted-function style path)
app.include_router(
    relay.router,
    prefix=RELAY_PREFIX,
    tags=["Notifications"]
)

# Testimonials
app.include_router(
    reviews.router,
    prefix="/api/v1/reviews",
    tags=["Reviews"]
)

# Booking dashboard
app.include_router(
    admin.router,
    prefix="/api/v1/admin",
    tags=["Admin"]
)

# Plan catalog and confirmation view
app.include_router(
    plans.router,
    prefix="/api/v1",
    tags=["Plans"]
)
app.include_router(
    plans.pages_router,
    tags=["Plans"]
)

# Contact form
app.include_router(
    contact.router,
    prefix="/api/v1/contact",
    tags=["Contact"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "CosmOracle API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


# =============================================================================
# Server Entry Point
# =============================================================================

def run() -> None:
    """
    Start the API server with uvicorn.

    Usage:
        python -m app.main
        cosmoracle-api
    """
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
