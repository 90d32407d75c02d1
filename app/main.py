"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from pathlib import Path
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.config import settings
from app.database import test_database_connection, close_db_connection, create_tables
from app.routers import (
    auth_router,
    listings_router,
    favorites_router,
    inquiries_router,
    search_router,
    users_router,
    properties_router,
    locations_router,
)
from app.utils.exceptions import APIException, ServiceUnavailableError
from app.services.error_handler import ErrorHandlerService
from app.middleware import RequestContextMiddleware

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await test_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    elif settings.is_development:
        await create_tables()

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    REST API for a property-listing marketplace.

    ## Features

    * **Authentication**: registration, login and stateless JWT sessions (7 days)
    * **Roles**: buyer, seller, agent and admin, checked on every protected route
    * **Listings**: sellers list their own properties; admins manage everything
    * **Favorites and inquiries**: buyers bookmark listings and contact owners
    * **Search**: conjunctive filters, facets and market statistics

    ## Authentication

    Obtain a token from `/api/auth/login` or `/api/auth/register` and send it as
    `Authorization: Bearer <token>`, or in a `token` cookie.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Accounts, sessions and admin user management"},
        {"name": "Listings", "description": "Listings, images and the seller dashboard"},
        {"name": "Properties", "description": "Owned properties"},
        {"name": "Locations", "description": "Addresses referenced by listings"},
        {"name": "Favorites", "description": "Bookmarked listings"},
        {"name": "Inquiries", "description": "Messages about listings"},
        {"name": "Search", "description": "Search, facets and market statistics"},
        {"name": "Users", "description": "Public user directory"},
        {"name": "Health", "description": "Service index and health checks"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.add_middleware(
    RequestContextMiddleware,
    enable_request_logging=not settings.is_testing,
    slow_request_threshold=2.0,
)

# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(listings_router, prefix=settings.api_prefix)
app.include_router(favorites_router, prefix=settings.api_prefix)
app.include_router(inquiries_router, prefix=settings.api_prefix)
app.include_router(search_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(locations_router, prefix=settings.api_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation failures are reported as 400."""
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP exceptions with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get(settings.api_prefix, tags=["Health"])
async def api_index():
    """Service index listing the resource endpoints."""
    prefix = settings.api_prefix
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "endpoints": {
            "auth": f"{prefix}/auth",
            "listings": f"{prefix}/listings",
            "properties": f"{prefix}/properties",
            "locations": f"{prefix}/locations",
            "favorites": f"{prefix}/favorites",
            "inquiries": f"{prefix}/inquiries",
            "search": f"{prefix}/search",
            "users": f"{prefix}/users",
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    if not await test_database_connection():
        raise ServiceUnavailableError("Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


# The static frontend is mounted last so API routes take precedence
if settings.frontend_dir:
    if Path(settings.frontend_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.frontend_dir, html=True), name="frontend")
        logger.info(f"Serving frontend from {settings.frontend_dir}")
    else:
        logger.warning(f"FRONTEND_DIR {settings.frontend_dir} is not a directory; frontend not served")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
