"""Health check endpoints."""
from fastapi import APIRouter
import logging

from ..core.config import settings
from ..core.database import health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "Academic Records API",
        "version": settings.app_version,
        "environment": settings.environment,
    }

@router.get("/db-health")
async def database_health():
    """Run SELECT 1 against the users, profiles and academic databases"""
    databases = await health_check_db()
    overall = "healthy" if all(databases.values()) else "unhealthy"
    if overall != "healthy":
        logger.warning(f"Database health degraded: {databases}")
    return {
        "status": overall,
        "databases": {name: ("healthy" if ok else "unhealthy") for name, ok in databases.items()},
    }
