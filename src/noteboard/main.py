"""Main entry point for the Noteboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from noteboard.api.v1 import (
    auth_router,
    forums_router,
    likes_router,
    notes_router,
    notifications_router,
    users_router,
)
from noteboard.core.errors import NoteboardError
from noteboard.core.settings import settings
from noteboard.db.session import create_tables
from noteboard.services.mailer import build_mailer

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Forums and notes with replies, likes and notifications",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(forums_router, prefix="/api/v1")
app.include_router(notes_router, prefix="/api/v1")
app.include_router(likes_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")


@app.exception_handler(NoteboardError)
async def handle_domain_error(request: Request, exc: NoteboardError) -> JSONResponse:
    """Translate service-layer errors into JSON responses."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
async def on_startup() -> None:
    create_tables()
    app.state.mailer = build_mailer(settings)
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("noteboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
