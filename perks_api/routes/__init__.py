# perks_api/routes/__init__.py
"""
API route handlers organized by domain.
"""

from perks_api.routes.health import router as health_router
from perks_api.routes.perks import router as perks_router

__all__ = [
    "health_router",
    "perks_router",
]
