"""Main FastAPI application - lead enrichment backend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from leadcrm.config import settings
from leadcrm.database import AsyncSessionLocal, engine
from leadcrm.routers import enrichment_routes
from leadcrm.scheduler import start_scheduler, stop_scheduler
from leadcrm.services.enrichment_engine import create_enrichment_engine

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Lead CRM Enrichment API",
    description="Background website enrichment and suitability scoring for CRM leads",
    version="1.0.0",
    redirect_slashes=False
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your frontend domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(enrichment_routes.router)


# ============================================
# HEALTH & ROOT ENDPOINTS
# ============================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    manager = getattr(app.state, "enrichment_manager", None)
    return {
        "status": "healthy",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "enrichment_running": bool(manager and manager.is_running),
        "search_rate_limiter": (
            manager.enricher.resolver.rate_limiter.get_stats() if manager else None
        )
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Lead CRM Enrichment API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


# ============================================
# STARTUP & SHUTDOWN
# ============================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting Lead CRM Enrichment API...")

    manager, reporter = create_enrichment_engine(AsyncSessionLocal)
    app.state.enrichment_manager = manager
    app.state.status_reporter = reporter

    start_scheduler(manager)

    logger.info("Application started successfully!")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down Lead CRM Enrichment API...")

    stop_scheduler()

    manager = getattr(app.state, "enrichment_manager", None)
    if manager is not None:
        await manager.shutdown()

    await engine.dispose()
