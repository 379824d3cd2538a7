"""API routes package."""

from .health_routes import router as health_router
from .pack_routes import router as pack_router, get_orchestrator

__all__ = ["health_router", "pack_router", "get_orchestrator"]
