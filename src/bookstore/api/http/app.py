"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.api.http.errors import (
    GENERIC_ERROR_MESSAGE,
    validation_exception_handler,
)
from src.bookstore.api.http.routers.authors import router as authors_router
from src.bookstore.api.http.routers.books import router as books_router
from src.bookstore.api.utils.app_startup import configure_logging
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, environment: str):
        super().__init__(app)
        self.environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if self.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": GENERIC_ERROR_MESSAGE},
                headers={"X-Request-ID": request_id},
            )


def _build_lifespan(config: ConfigData):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up application in {} environment", config.app.environment)
        deps = ApplicationDependencies.from_config(config)
        if config.database.create_tables:
            deps.database_service.create_all()
        app.state.app_dependencies = deps
        try:
            yield
        finally:
            logger.info("Shutting down application")
            deps.database_service.dispose()

    return lifespan


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application for the given configuration (the active one by default)."""
    config = config or get_config()
    configure_logging(config)

    if config.app.environment == "production" and (
        "*" in config.app.cors.origins and config.app.cors.allow_credentials
    ):
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    is_production = config.app.environment == "production"
    app = FastAPI(
        title=config.app.name,
        lifespan=_build_lifespan(config),
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    app.add_middleware(SecurityHeadersMiddleware, environment=config.app.environment)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(authors_router)
    app.include_router(books_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def readiness(request: Request):
        """Readiness check endpoint."""
        deps: ApplicationDependencies = request.app.state.app_dependencies
        if not deps.database_service.health_check():
            return JSONResponse(status_code=503, content={"status": "unavailable"})
        return {"status": "ready"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
