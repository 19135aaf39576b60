import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.application import DashboardService, build_dashboard_service
from backend.core.auth import warn_if_default_password
from backend.core.logging_setup import configure_logging
from backend.routes import dashboard, upload
from backend.workers.pipeline import IngestionWorker


def create_app(service: DashboardService | None = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Qarzdorlik Dashboard API", version="0.1.0")

    # Column layout errors surface here, before the first request.
    service = service or build_dashboard_service()
    app.state.dashboard_service = service
    app.state.ingestion_worker = IngestionWorker(service)
    warn_if_default_password()

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if not origins:
        origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dashboard.router, prefix="/api")
    app.include_router(upload.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight status payload for container checks."""
        return JSONResponse(service.get_status())

    return app


app = create_app()
