"""Route handlers for Web API."""

from kosync.web.routes.health import router as health_router
from kosync.web.routes.users import router as users_router
from kosync.web.routes.syncs import router as syncs_router

__all__ = [
    "health_router",
    "users_router",
    "syncs_router",
]
