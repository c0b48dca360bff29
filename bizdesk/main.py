"""
BizDesk - Backend API
FastAPI + JWT bearer auth + in-memory record store
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .auth.routes import router as auth_router
from .config import Settings, configure_logging, get_settings
from .errors import register_exception_handlers
from .routers import clients, enquiries, health, invoices, stats
from .storage import MemStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the record store on startup, drop it on shutdown."""
    app.state.store = MemStorage()
    logger.info(f"BizDesk API v{app.version} started")
    yield
    app.state.store = None
    logger.info("Shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="BizDesk API",
        description="Invoicing, client records and customer enquiries",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(clients.router, prefix="/api/clients", tags=["Clients"])
    app.include_router(invoices.router, prefix="/api/invoices", tags=["Invoices"])
    app.include_router(enquiries.router, prefix="/api/enquiries", tags=["Enquiries"])
    app.include_router(stats.router, prefix="/api/stats", tags=["Statistics"])

    @app.get("/")
    async def root():
        return {
            "name": "BizDesk API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
