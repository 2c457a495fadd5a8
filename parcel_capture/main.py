"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from parcel_capture.config import settings
from parcel_capture.api.rate_limit import limiter
from parcel_capture.middleware.error_handler import ErrorHandlerMiddleware
from parcel_capture.api.v1.routers import drafts, parcels

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Persistence API: {settings.parcel_api_base_url}, "
                f"default soil type: {settings.default_soil_type}")
    logger.info(f"Save rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    from parcel_capture.infrastructure.parcel_api_client import get_api_client
    logger.info("Shutting down application...")
    client = get_api_client()
    await client.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Parcel Boundary Capture API for small-scale agriculture

    This API captures parcel boundaries point by point and derives the
    geometric and agronomic figures shown while drawing and after saving.

    ## Features

    - **Capture Sessions**: One draft per session; points are appended in order
      and can be cleared at any time
    - **Live Metrics**: Area (hectares) and perimeter (meters) recomputed on
      every change
    - **Derived Estimates**: Acres, usable area, planting capacity and walking time
    - **Save Flow**: Ring closure, validation and hand-off to the persistence API

    ## Geometry

    1. Points are projected with an equirectangular approximation centered on
       their mean latitude
    2. Area uses the shoelace formula over the implicitly closed ring
    3. Perimeter sums haversine distances between consecutive points
    4. On save the ring is closed explicitly and rejected when it has fewer than
       three points or encloses no area
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(drafts.router, prefix="/api/v1")
app.include_router(parcels.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
