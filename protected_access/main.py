"""
Main FastAPI application.
"""
import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from protected_access.config import settings, APP_VERSION
from protected_access.services.access_service import access_service
from protected_access.routes import access, system

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up protected access API...")

    # Fail fast on a misconfigured class path
    for category in access_service.categories():
        access_service.access_class(category)
    logger.info(f"Loaded {len(access_service.categories())} access categories")

    yield

    logger.info("Shutting down protected access API...")


# Create FastAPI application
app = FastAPI(
    title="Protected Access - Resource Access Catalogue",
    description="Triggers file, process, network and thread accesses through many equivalent APIs.",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=json.loads(settings.cors_origins) if not settings.debug else ["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "details": {"exception": str(exc)} if settings.debug else None
        }
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Protected Access - Resource Access Catalogue",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/system/health"
    }


@app.get("/ping")
async def ping():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat() + "Z"}


# Include routers
app.include_router(access.router)
app.include_router(system.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "protected_access.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
