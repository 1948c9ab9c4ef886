"""
FastAPI application entry point for the RevOps attribution analytics API.

Configures logging and CORS, registers the analytics router, and starts the
ASGI server when run directly. The service holds no state between requests:
every call recomputes its result from the posted snapshot.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from revops_analytics import __version__
from revops_analytics.api import api_router
from revops_analytics.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and shutdown."""
    logger.info(f"{settings.app_name} starting")
    yield
    logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description=(
        "Multi-touch attribution and acquisition cohort analytics. "
        "Computes credit weights under six attribution models, per-activity "
        "ROI, top touchpoints, and cohort retention/LTV curves."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and load balancer probes."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint providing API information."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "revops_analytics.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
