"""SocialAI Insights — FastAPI Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from socialai.database import init_db, test_connection, db_url
from socialai.api.dashboard_routes import router as dashboard_router
from socialai.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 SocialAI Insights starting up...")
    if test_connection():
        try:
            init_db()
        except Exception as e:
            logger.error(f"❌ Table creation failed: {e}")
    else:
        logger.error("❌ Database NOT connected — endpoints will fail")
    yield
    logger.info("SocialAI Insights shut down")


app = FastAPI(
    title="SocialAI Insights",
    description="Social media and search console metrics dashboard with on-demand platform refresh.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dashboard_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "socialai-insights",
        "version": "1.0.0",
    }


@app.get("/debug/db", tags=["System"])
async def debug_db():
    """Debug endpoint — check database connectivity."""
    from socialai.database import _mask_url

    backend = "postgresql" if db_url.startswith("postgresql") else "sqlite"
    return {
        "connected": test_connection(),
        "backend": backend,
        "url": _mask_url(db_url),
    }
