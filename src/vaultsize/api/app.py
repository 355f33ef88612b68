"""FastAPI application for the vault size history REST API."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vaultsize import __version__
from vaultsize.api.routes import health, history
from vaultsize.core.aggregator import get_aggregator
from vaultsize.core.config import (
    API_SCHEDULER_ENABLED,
    VAULTSIZE_HOST,
    VAULTSIZE_PORT,
    setup_logging,
    validate_environment,
)
from vaultsize.core.scheduler import HistoryScheduler

logger = logging.getLogger(__name__)


def create_app(enable_scheduler: bool | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        enable_scheduler: Run the recurring aggregation while the app is
            up (defaults to VAULTSIZE_API_SCHEDULER)
    """
    run_scheduler = (
        API_SCHEDULER_ENABLED if enable_scheduler is None else enable_scheduler
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        setup_logging()
        is_valid, message = validate_environment()
        if not is_valid:
            logger.error("Invalid configuration: %s", message)
            raise RuntimeError(message)

        logger.info("Vault size API starting up...")
        scheduler = None
        if run_scheduler:
            scheduler = HistoryScheduler(get_aggregator())
            scheduler.start()
        app.state.scheduler = scheduler
        yield
        if scheduler is not None:
            await scheduler.shutdown()
        logger.info("Vault size API shutting down...")

    app = FastAPI(
        title="Vault Size History API",
        description="Daily file counts for a vault",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(history.router, prefix="/api/v1", tags=["History"])

    return app


# Create the default app instance
app = create_app()


def run_server():
    """Run the API server."""
    import uvicorn

    setup_logging()
    is_valid, message = validate_environment()
    if not is_valid:
        logger.error("Invalid configuration: %s", message)
        sys.exit(1)

    uvicorn.run(
        "vaultsize.api.app:app",
        host=VAULTSIZE_HOST,
        port=VAULTSIZE_PORT,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
