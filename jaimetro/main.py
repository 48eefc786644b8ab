from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jaimetro.api.auth import router as auth_router
from jaimetro.api.chart import router as chart_router
from jaimetro.api.daily import router as daily_router
from jaimetro.api.result import router as result_router
from jaimetro.config.settings import Settings, settings as default_settings
from jaimetro.core.logger import setup_logger
from jaimetro.db.session import Database


def _connect_database(database: Database) -> None:
    """Connect at startup. A failure is logged, not fatal: reads fall back to ephemeral data."""
    if database.connected:
        return
    try:
        database.connect()
    except SQLAlchemyError as e:
        logger.error(f"[DB] Could not initialize database, serving ephemeral data: {e}")
        database.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database on startup and release it on shutdown."""
    _connect_database(app.state.database)
    yield
    app.state.database.dispose()


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    in_query = any(err.get("loc", ("",))[0] == "query" for err in exc.errors())
    error = "Bad query params" if in_query else "Bad payload"
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"ok": False, "error": error})


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error for {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"ok": False, "error": "Server error"})


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use, defaults to the environment-derived settings
        database: Storage handle, defaults to one built from settings.database_url.
            It is connected during startup unless already connected.
    """
    settings = settings or default_settings
    database = database or Database(settings.database_url)

    app = FastAPI(title="Jai Metro", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    app.include_router(auth_router)
    app.include_router(chart_router)
    app.include_router(daily_router)
    app.include_router(result_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
        return response

    logger.info("FastAPI application initialized")
    return app


setup_logger(
    level=default_settings.log_level,
    log_file=default_settings.log_file,
    rotation=default_settings.log_rotation,
    retention=default_settings.log_retention,
)
app = create_app()
