"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import setup_logging
from app.kinetics.config import validate_sensitivity_tiers
from app.api.v1.router import api_router

setup_logging()
logger = logging.getLogger(__name__)

# Fail fast on misordered engine thresholds, for every sensitivity tier
validate_sensitivity_tiers(settings.kinetics_config())

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Caffeine decay tracking, next-dose guidance and sleep-impact insights.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

# Include API router
app.include_router(api_router, prefix="/api/v1")

logger.info("%s %s ready", settings.PROJECT_NAME, settings.VERSION)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Caffeine Kinetics API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "caffeine-kinetics-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "authors emails": settings.AUTHORS_EMAILS,
        "project url": settings.PROJECT_URL
    }
