"""
Bistro Reservations - Main Application Entry Point
Restaurant table reservation API
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware
from contextlib import asynccontextmanager
import structlog

from bistro.core.config import get_settings
from bistro.core.database import init_db
from bistro.core.events import event_bus
from bistro.core.exceptions import register_exception_handlers
from bistro.core.logger_config import configure_logging
from bistro.core.rate_limit import limiter
from bistro.api import auth, reservations, tables
from bistro.services.notifier import EmailNotifier, register_notification_handlers

settings = get_settings()
configure_logging(debug=settings.DEBUG)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing Bistro Reservations backend", environment=settings.ENVIRONMENT)
    init_db()
    register_notification_handlers(event_bus, EmailNotifier(settings))

    yield

    # Shutdown
    event_bus.clear_subscribers()
    logger.info("Shutting down Bistro Reservations backend")


# Create FastAPI application
app = FastAPI(
    title="Bistro Reservations API",
    description="Restaurant table reservations with capacity-based table allocation",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix=f"{settings.API_V1_PREFIX}/auth", tags=["auth"])
app.include_router(tables.router, prefix=f"{settings.API_V1_PREFIX}/tables", tags=["tables"])
app.include_router(reservations.router, prefix=f"{settings.API_V1_PREFIX}/reservations", tags=["reservations"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "bistro-reservations-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Bistro Reservations API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bistro.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
