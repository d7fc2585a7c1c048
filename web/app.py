"""
FastAPI application for the valuation engine.

JSON API over the valuation pipeline, the listing search and the market
tools. Production deployment configuration via environment variables.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.listings import ListingStore
from core.valuation import __version__ as ENGINE_VERSION
from utils.config import Config
from web.listing_routes import router as listing_router
from web.valuation_routes import router as valuation_router


logger = logging.getLogger(__name__)


# =============================================================================
# Environment Configuration
# =============================================================================

# Production mode detection
IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

# CORS configuration - the browser front-end calls this API directly
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only (Vite dev server)
    ALLOWED_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def create_app(
    config: Optional[Config] = None,
    store: Optional[ListingStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings (default: loaded from environment)
        store: Listing store (default: LISTINGS_PATH or the demo listings)
    """
    config = config or Config.load()

    app = FastAPI(
        title="RealEstate IQ",
        description="Comparable-based property valuation for Bosnia & Herzegovina",
        version=ENGINE_VERSION,
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )

    # Healthchecks: synchronous, no IO
    @app.get("/", include_in_schema=False)
    def root():
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    # Shared read-only state: loaded once, never mutated by requests
    app.state.config = config
    app.state.store = store if store is not None else config.load_listings()
    app.state.engine = config.build_engine()
    app.state.rng = config.make_rng()

    app.include_router(listing_router)
    app.include_router(valuation_router)

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": ENGINE_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
            "listings": len(app.state.store),
        }

    logger.info(
        "RealEstate IQ app created with %d listings (default baseline %.0f BAM/m2)",
        len(app.state.store),
        config.default_baseline_ppa,
    )
    return app


# Create app instance for uvicorn
app = create_app()
