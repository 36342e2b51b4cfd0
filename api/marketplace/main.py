"""Main FastAPI application."""

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from marketplace import __version__
from marketplace.api.deps import get_storage
from marketplace.api.v1 import api_router
from marketplace.config import settings
from marketplace.database import engine
from marketplace.logging_config import configure_logging
from marketplace.storage.base import BaseStorageDriver, StorageError

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Asset Marketplace Service",
    description="Backend for a digital-asset marketplace: users, assets, pictures and search",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/v1")


@app.get("/health")
async def health_check(storage_driver: BaseStorageDriver = Depends(get_storage)):
    """Health check endpoint."""
    # Check database
    db_status = "disconnected"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_status = "connected"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = f"error: {str(e)}"

    # Check object storage
    storage_status = "disconnected"
    try:
        if await storage_driver.test_connection():
            storage_status = "connected"
    except StorageError as e:
        logger.error(f"Storage health check failed: {e}")
        storage_status = f"error: {str(e)}"

    overall_status = "ok" if db_status == "connected" and storage_status == "connected" else "degraded"

    return {
        "status": overall_status,
        "db": db_status,
        "storage": storage_status,
    }


def run():
    """Run the server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "marketplace.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    run()
