"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fitscore import __version__
from fitscore.api.routes import router
from fitscore.api.metrics_routes import router as metrics_router
from fitscore.api.middleware import setup_cors, setup_rate_limiting
from fitscore.config import LOG_LEVEL, ENABLE_METRICS
from fitscore.db.connection import Database
from fitscore.exceptions import FitScoreError
from fitscore.observability.metrics import track_error
from fitscore.observability.metrics_middleware import setup_metrics_middleware

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL, logging.INFO)
)

logger = logging.getLogger(__name__)


def create_api_application(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        database: Pool manager to use; a new one for DATABASE_URL when omitted
    """
    database = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager for FastAPI application"""
        logger.info("Starting API server...")
        await database.init_pool()
        logger.info("Database pool initialized")

        yield

        logger.info("Shutting down API server...")
        await database.close_pool()
        logger.info("Database pool closed")

    app = FastAPI(
        title="FitScore API",
        description="Progress, habit streak and exercise media priority scoring",
        version=__version__,
        lifespan=lifespan
    )
    app.state.database = database

    # Setup middleware
    setup_cors(app)
    setup_rate_limiting(app)
    setup_metrics_middleware(app)

    # Include routes
    app.include_router(router)
    if ENABLE_METRICS:
        app.include_router(metrics_router)

    @app.exception_handler(FitScoreError)
    async def fitscore_exception_handler(request: Request, exc: FitScoreError):
        track_error(exc.__class__.__name__, "api")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        track_error(exc.__class__.__name__, "api")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    logger.info("FastAPI application created")

    return app
