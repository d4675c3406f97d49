"""
Squeeze Alert Backend - FastAPI Application

Main entry point for the backend API and dashboard.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from squeeze_alert.core.config import settings
from squeeze_alert.api.v1 import router as api_v1_router
from squeeze_alert.schemas.squeeze import SqueezePoint
from squeeze_alert.services.indicators import get_squeeze_service

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logging.basicConfig(level=settings.log_level.upper())
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    if not static_path.is_dir():
        logger.warning(f"Static directory {static_path} not found - dashboard disabled")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Squeeze Alert API

    ## Indicator
    - **Bollinger Bands** inside a **Keltner Channel** marks a squeeze
    - **ATR gate** ignores squeezes on flat, volatility-free series
    - **Momentum** is the linear regression value of the detrended close

    All calculations are pure Python/NumPy and deterministic.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/api/data", response_model=list[SqueezePoint])
async def get_demo_data():
    """
    Squeeze indicator over the demo series.

    Returns one {time, close, value, sqzOn} object per bar.
    """
    result = await get_squeeze_service().calculate_demo()
    return result.points


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy" if await get_squeeze_service().health_check() else "unhealthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


# Dashboard - mounted last so API routes take precedence
static_path = Path(settings.static_dir)
if not static_path.is_absolute():
    static_path = BACKEND_DIR / static_path
if static_path.is_dir():
    app.mount("/", StaticFiles(directory=static_path, html=True), name="static")
