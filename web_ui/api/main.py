"""
VIP Access Web API - Main FastAPI Application

Serves the resolved access state to the dashboard:
- Status read per user (backed by an injected record provider)
- Stateless resolve for clients that already hold the profile fields
- Live countdown over WebSocket
"""

import sys
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional

# Add parent directory to path to import existing modules
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from access.providers import InMemoryRecordProvider, RecordProvider
from config import Settings, settings as default_settings
from utils.logger import logger


def create_app(
    provider: Optional[RecordProvider] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        provider: Source of user access records. Defaults to an empty
            in-memory provider; production wiring passes the store client.
        settings: Application settings. Defaults to the environment settings.
    """
    settings = settings or default_settings
    provider = provider if provider is not None else InMemoryRecordProvider()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown events"""
        logger.info(
            f"VIP Access API on http://{settings.ACCESS_HOST}:{settings.ACCESS_PORT} "
            f"(precedence={settings.ACCESS_PRECEDENCE}, tick={settings.REFRESH_INTERVAL_SECONDS}s)"
        )
        yield
        logger.info("VIP Access API shutting down...")

    app = FastAPI(
        title="VIP Access API",
        description="Subscription and trial access status for the VIP betting tools",
        version="1.0.0",
        lifespan=lifespan,
        redirect_slashes=False,  # Don't redirect /path to /path/ - causes CORS issues
    )

    app.state.record_provider = provider
    app.state.settings = settings

    # Build CORS origins list including custom hostname
    cors_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]
    if settings.ACCESS_HOST not in ("localhost", "127.0.0.1"):
        cors_origins.extend([
            f"http://{settings.ACCESS_HOST}:5173",
            f"http://{settings.ACCESS_HOST}:{settings.ACCESS_PORT}",
        ])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Authorization",
            "Content-Type",
            "Origin",
            "X-Requested-With",
        ],
    )

    from web_ui.api.routes import access

    app.include_router(access.router, prefix="/api/v1", tags=["Access"])
    # WebSocket routes (no prefix needed - path defined in router)
    app.include_router(access.ws_router, tags=["Access WebSocket"])

    @app.get("/")
    async def root():
        """API root endpoint"""
        return {
            "name": "VIP Access API",
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.ACCESS_HOST, port=default_settings.ACCESS_PORT)
