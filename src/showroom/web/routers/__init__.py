"""API routers for the REST API."""

from showroom.web.routers.imports import router as products_router
from showroom.web.routers.planner import router as planner_router

__all__ = [
    "planner_router",
    "products_router",
]
