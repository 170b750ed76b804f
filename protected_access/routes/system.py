"""
System API routes for health checks and info.
"""
import logging
import platform
import socket
import time
from datetime import datetime

from fastapi import APIRouter

from protected_access.config import settings, APP_VERSION
from protected_access.models.schemas import SystemHealth, SystemInfo
from protected_access.services.access_service import access_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/system", tags=["system"])

# Track application start time
app_start_time = time.time()


def _loopback_available() -> bool:
    """Check that an ephemeral port can be bound on the loopback host."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind((settings.loopback_host, 0))
        return True
    except OSError as e:
        logger.warning(f"Loopback host {settings.loopback_host} unavailable: {e}")
        return False


@router.get("/health", response_model=SystemHealth)
async def health_check():
    """Get system health status."""
    loopback_available = _loopback_available()
    return SystemHealth(
        status="healthy" if loopback_available else "degraded",
        timestamp=datetime.utcnow(),
        version=APP_VERSION,
        uptime_seconds=int(time.time() - app_start_time),
        category_count=len(access_service.categories()),
        loopback_available=loopback_available
    )


@router.get("/info", response_model=SystemInfo)
async def system_info():
    """Get system information."""
    info = access_service.get_info()
    limits = {
        "loopback_timeout_seconds": settings.loopback_timeout_seconds,
        "command_timeout_seconds": settings.command_timeout_seconds,
        "thread_join_timeout_seconds": settings.thread_join_timeout_seconds,
    }
    return SystemInfo(
        version=APP_VERSION,
        platform=platform.platform(),
        categories=info["categories"],
        limits=limits,
        directories={
            "resources": info["resources_dir"],
            "executables": info["executables_dir"],
        }
    )
