"""
MoodCoach FastAPI Application

Main entry point for the MoodCoach API: mood check-ins, personality
assessment and personalized coaching interventions.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Common library imports
from common.database import MongoDB
from common.utils import success_response

# App-specific imports
from moodcoach import __version__
from moodcoach.config import settings

# Import routers
from moodcoach.routers import (
    checkin_router,
    assessment_router,
    interventions_router,
    history_router,
)

# Import service initialization
from moodcoach.dependencies import init_all_services

logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like database connections
    and service initialization.
    """
    # Startup
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting MoodCoach API...")

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    init_all_services(db=main_db.db, settings=settings)
    logger.info("MoodCoach API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down MoodCoach API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="MoodCoach API",
    description="Personality-aware mood check-ins and coaching interventions",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# Include Routers (all under /api/v1 prefix)
# =============================================================================
API_PREFIX = "/api/v1"

app.include_router(checkin_router, prefix=API_PREFIX, tags=["Check-ins"])
app.include_router(assessment_router, prefix=API_PREFIX, tags=["Assessment"])
app.include_router(interventions_router, prefix=API_PREFIX, tags=["Interventions"])
app.include_router(history_router, prefix=API_PREFIX, tags=["History"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Reports whether MongoDB answers a ping and whether the orchestrator
    stage is configured.
    """
    database_ok = await main_db.ping()

    return success_response({
        "status": "ok" if database_ok else "degraded",
        "version": __version__,
        "database": database_ok,
        "orchestrator": settings.orchestrator_enabled(),
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
