"""
FastAPI application for the Extractly extraction API.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Optional
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from extractly.config import Config, load_config
from extractly.container import AppContext
from extractly.errors import ExtractlyError
from extractly.observability import configure_logging

from .routes import auth_router, login_router, router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle."""
    context: AppContext = app.state.context
    await context.initialize()
    yield
    await context.shutdown()


def describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a one-line client message."""
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if error.get("type") == "missing":
            return f"Missing required parameter: {field or 'request body'}"
        if field == "url":
            return "Invalid URL format"
        if field:
            return f"Invalid value for {field}: {error.get('msg', 'invalid')}"
    return "Invalid request body"


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the API around an application context.

    Without an explicit context one is created from the discovered
    configuration.
    """
    context = context or AppContext(load_config())
    config = context.config

    app = FastAPI(
        title=f"{config.project_name} API",
        version=config.version,
        lifespan=lifespan,
    )
    app.state.context = context

    cors_kwargs: dict[str, Any] = (
        {"allow_origins": config.web.cors_origins} if config.web.cors_origins else {"allow_origin_regex": ".*"}
    )
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
        expose_headers=["Content-Type"],
        max_age=config.web.cors_max_age,
        **cors_kwargs,
    )

    app.include_router(router)
    app.include_router(auth_router)
    if config.environment == "development":
        app.include_router(login_router)

    @app.middleware("http")
    async def add_request_context(request: Request, call_next: Callable) -> Any:
        """Tag every request with an id and log its outcome."""
        request_id = str(uuid4())
        start_time = time.perf_counter()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
            process_time = time.perf_counter() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            response.headers["X-Request-ID"] = request_id
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                response_time_ms=round(process_time * 1000, 2),
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

    @app.exception_handler(ExtractlyError)
    async def extractly_exception_handler(request: Request, exc: ExtractlyError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": describe_validation_error(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = {"success": False, "error": "Route not found", "path": request.url.path}
        else:
            content = {"success": False, "error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception", path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )

    return app


def app_factory() -> FastAPI:
    """Entry point for ``uvicorn --factory``: configure logging, then build the app."""
    config = load_config()
    configure_logging(config.monitoring)
    return create_app(AppContext(config))


def run_web_server(config: Config, *, reload: bool = False) -> None:
    """Function to run the FastAPI server."""
    import uvicorn

    logger.info("Starting Extractly API", host=config.web.host, port=config.web.port)
    if reload:
        uvicorn.run(
            "extractly.web.main:app_factory",
            factory=True,
            host=config.web.host,
            port=config.web.port,
            reload=True,
        )
    else:
        uvicorn.run(create_app(AppContext(config)), host=config.web.host, port=config.web.port)
