"""FastAPI application for the document intake service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.dependencies import AppServices, build_services
from app.api.routers.documents_router import documents_router
from app.api.routers.query_router import query_router
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.logging.logger import Log


def create_app(
    settings: Settings | None = None,
    services: AppServices | None = None,
) -> FastAPI:
    """Build the application.

    When services are given (tests), startup skips the connection pool and
    uses them as-is; otherwise every collaborator is built from settings.
    """
    settings = settings if settings is not None else Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if services is not None:
            app.state.services = services
            yield
            return

        init_pool(settings)
        built: AppServices | None = None
        try:
            built = build_services(settings)
            app.state.services = built
            Log.info("Document intake API ready")
            yield
        finally:
            if built is not None:
                built.object_store.close()
            close_pool()
            Log.info("Document intake API shut down")

    app = FastAPI(
        title="Document Intake",
        description="Document ingestion, enrichment and read-only query gateway.",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-User-Id"],
    )
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.include_router(documents_router)
    app.include_router(query_router)

    @app.get("/health", tags=["Health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = {
        ".".join(str(part) for part in error["loc"] if part != "body"): error["msg"]
        for error in exc.errors()
    }
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": details},
    )
