"""
Team Billing - FastAPI Application

Main entry point for the backend API.
Provides endpoints for accounts, teams, plans and subscriptions.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.settings import settings
from app.infrastructure.db.database import close_db, init_db
from app.infrastructure.exceptions import (
    BillingError,
    UnauthorizedError,
)
from app.infrastructure.security.cookies import clear_session_cookies

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Team Billing Backend starting in {settings.environment} mode...")

    await init_db()
    logger.info("SQLModel database connection pool initialized")

    yield

    # Shutdown
    await close_db()
    logger.info("SQLModel database connection pool closed")

    logger.info("Team Billing Backend shutting down...")


app = FastAPI(
    title="Team Billing",
    description="Teams, subscription plans, orders and upgrade proration",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS configuration from Settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(UnauthorizedError)
async def unauthorized_error_handler(request: Request, exc: UnauthorizedError):
    """Handle authorization failures, dropping stale session cookies."""
    response = JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )
    if exc.clear_session:
        clear_session_cookies(response, settings)
    return response


@app.exception_handler(BillingError)
async def billing_error_handler(request: Request, exc: BillingError):
    """Handle not found, bad request and all other application errors."""
    if exc.status_code >= 500:
        logger.error(f"Unhandled application error: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "team-billing"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Team Billing API",
        "version": "1.0.0",
        "docs": "/docs",
    }


# ============================================================================
# Import and register routers
# ============================================================================

from app.api.routes import auth, plans, subscriptions, teams  # noqa: E402

app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(teams.router, prefix="/api", tags=["Teams"])
app.include_router(plans.router, prefix="/api", tags=["Plans"])
app.include_router(subscriptions.router, prefix="/api", tags=["Subscriptions"])
