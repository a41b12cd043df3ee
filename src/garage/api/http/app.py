"""FastAPI application: middleware, lifespan and module route mounting."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.garage.api.http.app_data import ApplicationDependencies
from src.garage.api.http.routers.health import router as health_router
from src.garage.api.utils.app_startup import configure_logging
from src.garage.core.module_registry import load_module_routes
from src.garage.core.services import DbManageService, DbSessionService
from src.garage.runtime.context import get_config

__all__ = ["app", "startup", "shutdown"]

main_config = get_config()
is_production = main_config.app.environment == "production"

configure_logging()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add browser hardening headers to every response."""

    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response


async def startup() -> None:
    """Create module tables and publish the app-wide dependencies."""
    logger.info("Starting garage API ({})", get_config().app.environment)

    database_service = DbSessionService()
    DbManageService(database_service).create_all()
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        loaded_modules=app.state.loaded_modules,
    )


async def shutdown() -> None:
    logger.info("Stopping garage API")
    deps: ApplicationDependencies | None = getattr(app.state, "app_dependencies", None)
    if deps is not None:
        deps.database_service.dispose()


@asynccontextmanager
async def lifespan(_: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title=main_config.app.name,
    lifespan=lifespan,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
)

cors = main_config.app.cors
if is_production and "*" in cors.origins:
    raise RuntimeError("CORS origin '*' is not allowed with credentials in production")

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its id and turn unhandled errors into JSON 500s.

    HTTP and validation errors are answered by FastAPI before they get here.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    started = time.perf_counter()

    def elapsed_ms() -> float:
        return round((time.perf_counter() - started) * 1000, 1)

    with logger.contextualize(
        request_id=request_id, method=request.method, path=request.url.path
    ):
        logger.info("request.start")
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.bind(
                status_code=500, duration_ms=elapsed_ms(), error_type=type(exc).__name__
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        logger.bind(status_code=response.status_code, duration_ms=elapsed_ms()).info(
            "request.end"
        )
        response.headers.setdefault("X-Request-ID", request_id)
        return response


app.include_router(health_router)
app.state.loaded_modules = load_module_routes(app)
