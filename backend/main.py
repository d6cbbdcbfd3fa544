"""
FastAPI application entry point for the FUT trading dashboard gateway.

Premium pages and widgets are gated on the caller's entitlements, resolved
per request from the trading assistant backend.
"""

import os
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from futdash.config import get_settings
from futdash.entitlements.dependencies import install_gate_handlers
from futdash.api.routes import health
from futdash.api.routes import entitlements
from futdash.api.routes import premium
from futdash.api.routes import squad

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    logger.info(
        "Starting FUT dashboard gateway",
        extra={
            "session_api_base_url": settings.session_api_base_url,
            "assume_authenticated": settings.assume_authenticated,
        },
    )

    # Shared connection pool for session API calls; credentials are added
    # per request, never stored on this client.
    owns_http_client = getattr(app.state, "http_client", None) is None
    if owns_http_client:
        app.state.http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                settings.timeout_seconds,
                connect=settings.connect_timeout_seconds,
            ),
        )

    yield

    # Shutdown
    if owns_http_client:
        await app.state.http_client.aclose()
        app.state.http_client = None
    logger.info("Shutting down FUT dashboard gateway")


# Create FastAPI app
app = FastAPI(
    title="FUT Dashboard Gateway",
    description="Entitlement resolution and premium access gating for the trading dashboard",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (configure for your frontend domain)
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Gate redirects (login/billing) and widget fallbacks
install_gate_handlers(app)

# Include health route (bypasses entitlement checks)
app.include_router(health.router)

# Include entitlement state route (never denies; reports status)
app.include_router(entitlements.router)

# Include premium pages and widgets (gated)
app.include_router(premium.router)

# Include squad builder widgets (not gated)
app.include_router(squad.router)
