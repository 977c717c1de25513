"""
API routers for different endpoints.
"""

from .health import router as health_router
from .prompts import router as prompts_router
from .users import router as users_router
from .catalog import categories_router, models_router

__all__ = [
    "health_router",
    "prompts_router",
    "users_router",
    "categories_router",
    "models_router",
]
