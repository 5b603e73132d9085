"""
Sports Organizer - FastAPI Application

Provides the REST API for organizing competitions, refereeing matches
and following standings.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .api.routes import router
from .storage import get_repository, reset_repository

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Connecting to storage...")
    repository = get_repository()
    if repository.health_check():
        logger.info(f"Storage ready ({repository.__class__.__name__})")
    else:
        logger.warning("Storage health check failed")

    yield

    logger.info("Shutting down...")
    reset_repository()


app = FastAPI(
    title="Sports Organizer",
    description="Organize tournaments: groups, schedules, knockout brackets and standings",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


# Run with: uvicorn sportsorganizer.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
