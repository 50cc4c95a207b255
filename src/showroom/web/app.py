"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showroom.application import ServiceFactory
from showroom.application.config import ShowroomSettings, settings_from_env
from showroom.web.exceptions import register_exception_handlers
from showroom.web.routers import planner_router, products_router


def create_app(settings: ShowroomSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings for the app's services. Defaults to the built-in
            settings overlaid with SHOWROOM_STORE_URL / SHOWROOM_STORE_KEY.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Showroom API",
        description="Bulk product import and space planner quotes for the furniture catalog",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.factory = ServiceFactory(settings or settings_from_env())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(products_router, prefix="/api/v1")
    app.include_router(planner_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Application instance for ASGI servers (uvicorn)
app = create_app()
