"""FastAPI application for the Influencer Trust service."""

import contextlib
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.dependencies import get_service_container
from .endpoints import analysis, health, influencers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the service container on startup and release it on shutdown."""
    container = get_service_container()
    logger.info("🚀 Influencer Trust API starting")

    yield  # Application runs here

    await container.shutdown()
    logger.info("👋 Influencer Trust API stopped")


# Create FastAPI application
app = FastAPI(
    title="Influencer Trust API",
    description="Health-claim extraction, verification and trust scoring for influencers",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(influencers.router)
app.include_router(analysis.router)
