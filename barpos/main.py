"""
Bar POS - Main Application Entry Point
Floor plan, table sessions, order intake and invoicing
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import structlog

from barpos import __version__
from barpos.core.config import get_settings
from barpos.core.database import init_db
from barpos.core.exceptions import POSError, pos_error_handler
from barpos.core.logging import configure_logging
from barpos.api import invoices, orders, products, table_sessions, tables

settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing Bar POS backend", environment=settings.ENVIRONMENT)
    if settings.AUTO_CREATE_TABLES:
        init_db()
    else:
        logger.info("Database managed by Alembic migrations")

    yield

    # Shutdown
    logger.info("Shutting down Bar POS backend")


# Create FastAPI application
app = FastAPI(
    title="Bar POS API",
    description="Floor plan, table sessions and invoicing for bars and restaurants",
    version=__version__,
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

app.add_exception_handler(POSError, pos_error_handler)

# Include routers
prefix = settings.API_V1_PREFIX
app.include_router(tables.router, prefix=f"{prefix}/tables", tags=["tables"])
app.include_router(table_sessions.router, prefix=f"{prefix}/table-sessions", tags=["table-sessions"])
app.include_router(orders.router, prefix=f"{prefix}/orders", tags=["orders"])
app.include_router(products.router, prefix=f"{prefix}/products", tags=["products"])
app.include_router(invoices.router, prefix=f"{prefix}/invoices", tags=["invoices"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "barpos-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Bar POS API",
        "version": __version__,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "barpos.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
