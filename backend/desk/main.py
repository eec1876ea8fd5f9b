"""FastAPI application entry point."""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from desk.api.v1.router import api_router
from desk.config import settings
from desk.core.logging_middleware import RequestLoggingMiddleware
from desk.models.base import get_async_session
from lifecycle.errors import LifecycleError

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Tenant maintenance requests and their status pipeline",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Middleware (order matters)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.exception_handler(LifecycleError)
async def lifecycle_error_handler(request: Request, exc: LifecycleError) -> JSONResponse:
    """Report lifecycle rejections with the same body shape as HTTPException."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health", response_model=None)
async def health_check(
    session: AsyncSession = Depends(get_async_session),
) -> dict[str, str] | JSONResponse:
    """Health check endpoint. Reports 500 when the database is unreachable."""
    try:
        await session.execute(select(1))
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Health check failed: %s", exc)
        return JSONResponse(
            status_code=500, content={"status": "error", "error": str(exc)}
        )
    return {"status": "healthy"}
