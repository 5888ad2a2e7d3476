"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from speciesatlas.web.core.container import Container
from speciesatlas.web.core.lifespan import lifespan
from speciesatlas.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from speciesatlas.web.routers import (
    animal_speed_api_routes,
    animal_speed_view_routes,
    species_api_routes,
    species_view_routes,
)


def create_app(container: Container | None = None) -> FastAPI:
    """Create FastAPI application with dependency injection.

    Args:
        container: Pre-built container, e.g. one with test overrides. A fresh
            one is created when omitted.

    Returns:
        FastAPI: The configured application instance.
    """
    container = container or Container()

    app = FastAPI(
        lifespan=lifespan,
        title="Species Atlas API",
        description="Animal speed chart and species catalogue",
        version="1.0.0",
    )

    app.add_middleware(StructuredRequestLoggingMiddleware)

    container.wire(
        modules=[
            "speciesatlas.web.routers.animal_speed_api_routes",
            "speciesatlas.web.routers.animal_speed_view_routes",
            "speciesatlas.web.routers.species_api_routes",
            "speciesatlas.web.routers.species_view_routes",
        ]
    )

    # === API Routes ===
    app.include_router(animal_speed_api_routes.router, prefix="/api", tags=["Animal Speed API"])
    app.include_router(species_api_routes.router, prefix="/api", tags=["Species API"])

    # === View Routes (excluded from API documentation) ===
    app.include_router(
        animal_speed_view_routes.router,
        tags=["Animal Speed Views"],
        include_in_schema=False,
    )
    app.include_router(
        species_view_routes.router,
        tags=["Species Views"],
        include_in_schema=False,
    )

    path_resolver = container.path_resolver()
    app.mount("/static", StaticFiles(directory=str(path_resolver.get_static_dir())), name="static")

    @app.get("/", include_in_schema=False)
    async def read_root() -> RedirectResponse:
        """Send visitors to the chart page."""
        return RedirectResponse(url="/animals/speed")

    app.container = container  # type: ignore[attr-defined]
    return app
