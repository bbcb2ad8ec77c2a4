from .score_router import score_router
from .health_router import health_router

__all__ = ["score_router", "health_router"]
