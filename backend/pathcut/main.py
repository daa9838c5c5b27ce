"""
Main application module for the path-cutting backend.

This file sets up the FastAPI application, configures CORS so a
drawing frontend can make cross-origin requests, and exposes a simple
health check endpoint.  Routers for the path and shape APIs are
included under the `/api` namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_paths import router as paths_router
from .api.routes_shapes import router as shapes_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="pathcut")

    # Allow all origins by default.  Restrict this in production.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(paths_router, prefix="/api", tags=["paths"])
    app.include_router(shapes_router, prefix="/api", tags=["shapes"])

    return app


app = create_app()
