import logging
import time
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import (
    API_VERSION,
    APP_ENV,
    FRONTEND_URL,
    LOG_LEVEL,
    PORT,
    is_production,
)
from core.api import register_exception_handlers, success_response
from db import db_manager, init_database
from places import router as places_router
from places.services import PlaceService

# Basic logging configuration
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI App
app = FastAPI(title="Map Places API", version=API_VERSION)

# CORS Middleware Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)
logger.info("CORS configured for origin: %s", FRONTEND_URL)

register_exception_handlers(app)
app.include_router(places_router)


if not is_production():

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log method, path, status and duration of every request."""
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s - %d - %.0fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


# --- Application Lifecycle Events ---
@app.on_event("startup")
async def startup_event():
    """Connect to MongoDB, ensure indexes and build the place service."""
    try:
        await db_manager.ping()
        await db_manager.init_beanie()
        await init_database()
        app.state.place_service = PlaceService()
        logger.info("Application startup completed successfully.")
    except Exception as e:
        logger.critical(
            "CRITICAL: Failed to initialize application during startup: %s",
            str(e),
            exc_info=True,
        )
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up resources when shutting down."""
    await db_manager.cleanup_connections()
    logger.info("Application shutdown completed successfully")


# --- Informational Routes ---
@app.get("/health", tags=["meta"])
async def health_check():
    """Report that the API is up."""
    return {
        **success_response(message="API is running"),
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": APP_ENV,
    }


@app.get("/", tags=["meta"])
async def root():
    """Welcome document pointing at the API entry points."""
    return {
        **success_response(message="Welcome to the Map Places API"),
        "version": API_VERSION,
        "endpoints": {
            "api": "/api",
            "places": "/api/places",
            "health": "/health",
        },
        "frontend": FRONTEND_URL,
        "documentation": "/docs",
    }


@app.get("/api", tags=["meta"])
async def api_info():
    """Describe the available API resources."""
    return {
        **success_response(message="Map Places API"),
        "version": API_VERSION,
        "endpoints": {
            "places": "/api/places",
            "health": "/health",
        },
        "documentation": "/docs",
    }


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run("app:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
