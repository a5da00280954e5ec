from fastapi import APIRouter, FastAPI

from .auth import router as auth_router
from .communication import router as communication_router
from .discount_items import router as discount_items_router
from .exclusive_items import router as exclusive_items_router
from .health import router as health_router
from .users import router as users_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Register every API router under the ``/api`` prefix."""

    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(health_router)
    api_router.include_router(auth_router)
    api_router.include_router(users_router)
    api_router.include_router(exclusive_items_router)
    api_router.include_router(discount_items_router)
    api_router.include_router(communication_router)
    app.include_router(api_router)
