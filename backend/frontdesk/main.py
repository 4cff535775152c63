"""Front Desk Billing — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from frontdesk.api.v1.auth import router as auth_router
from frontdesk.api.v1.bookings import router as bookings_router
from frontdesk.api.v1.food import router as food_router
from frontdesk.api.v1.invoices import router as invoices_router
from frontdesk.api.v1.payments import router as payments_router
from frontdesk.api.v1.rooms import router as rooms_router
from frontdesk.api.v1.settings import router as settings_router
from frontdesk.config import settings
from frontdesk.errors import DomainError

# Configure root logger so all frontdesk.* loggers output to stderr (captured by Docker).
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    yield
    # Shutdown — dispose engine connections
    from frontdesk.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Room, food and invoice settlement for a hotel front desk.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render service-layer failures as ``{"detail": ..., "kind": ...}``."""
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.kind)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "kind": exc.kind})


# Routers
app.include_router(auth_router)
app.include_router(rooms_router)
app.include_router(food_router)
app.include_router(bookings_router)
app.include_router(invoices_router)
app.include_router(payments_router)
app.include_router(settings_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/api/v1/health", tags=["health"])
async def api_health_check() -> dict[str, str]:
    return await health_check()


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
