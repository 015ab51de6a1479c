"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.middleware.rate_limit import limiter
from app.api.v1.routers import behavior, location, recommendations, trees, zones

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
    logger.info(f"Location: gps_timeout={settings.gps_timeout_seconds}s, "
                f"cache_ttl={settings.location_cache_ttl_hours}h")
    logger.info(f"Weather: {'enabled' if settings.weather_api_key else 'disabled (no API key)'}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    from app.infrastructure.external_api_client import close_api_clients
    logger.info("Shutting down application...")
    await close_api_clients()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Location-Aware Tree Compatibility & Recommendation API

    This API recommends tree species for a user's land in Kenya, based on
    where they are, what they want the trees for, and the current weather.

    ## Features

    - **Location Acquisition**: Cached location, then device GPS, then IP
      geolocation, with manual entry as the last resort
    - **Zone Resolution**: Map coordinates to a county and agro-ecological zone
    - **Compatibility Scoring**: Region, agro-zone and conservation-goal matching
      with a small live-weather bonus
    - **Seasonal Advice**: Long and short rains planting windows
    - **Success Estimates**: Weighted blend of location, zone, season and weather
    - **Personalization**: Likes from users with similar goals nudge the ranking
    - **Robust Error Handling**: Automatic retries with exponential backoff for external
      API calls
    - **Rate Limiting**: Protects the API from abuse
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
app.include_router(trees.router, prefix="/api/v1")
app.include_router(recommendations.router, prefix="/api/v1")
app.include_router(location.router, prefix="/api/v1")
app.include_router(zones.router, prefix="/api/v1")
app.include_router(behavior.router, prefix="/api/v1")


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
