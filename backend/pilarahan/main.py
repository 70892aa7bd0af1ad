from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pilarahan.api import assistant_routes, classify_routes, meta_routes, reference_routes
from pilarahan.core.config import settings
from pilarahan.core.telemetry import RequestTelemetryMiddleware
from pilarahan.services.context import ServiceContext


def create_app(services: Optional[ServiceContext] = None) -> FastAPI:
    """Build the app. Tests pass their own ServiceContext; otherwise it comes from settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = services or ServiceContext.from_settings(settings)
        app.state.services = ctx
        try:
            yield
        finally:
            await ctx.aclose()

    app = FastAPI(title=settings.PROJECT_NAME, version=settings.APP_VERSION, lifespan=lifespan)

    # Structured request logging + request_id
    app.add_middleware(RequestTelemetryMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(classify_routes.router, prefix=settings.API_PREFIX)
    app.include_router(assistant_routes.router, prefix=settings.API_PREFIX)
    app.include_router(reference_routes.router, prefix=settings.API_PREFIX)
    app.include_router(meta_routes.router)
    return app


app = create_app()
