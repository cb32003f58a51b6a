"""FastAPI application with lifespan startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from oidexplorer import __version__
from oidexplorer.api.routes import health, oids
from oidexplorer.config import Settings
from oidexplorer.constants import INTERNAL_ERROR_MESSAGE
from oidexplorer.errors import (
    ErrorClass,
    OidExplorerError,
    StoreError,
    classify_error,
    status_code_for,
)
from oidexplorer.logging_config import setup_logging
from oidexplorer.services.data_service import DataService

_settings = Settings()
setup_logging(_settings.log_level)

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = _settings
    data_service = DataService(settings)

    app.state.settings = settings
    app.state.data_service = data_service

    # Connect eagerly so a bad DSN shows up in the startup log; requests
    # retry the connection if this attempt fails.
    try:
        if settings.create_schema:
            await data_service.create_schema()
        else:
            await data_service.get_session_factory()
    except StoreError:
        _logger.error("event=db_unavailable action=retry_on_request")

    yield

    _logger.info("event=shutdown")
    await data_service.dispose()


app = FastAPI(
    title="OID Explorer",
    description="Read-only lookup API over the OID namespace",
    version=__version__,
    lifespan=lifespan,
)

if _settings.cors_origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.cors_origin_list,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
        allow_credentials=False,
    )


@app.exception_handler(OidExplorerError)
async def handle_lookup_error(
    request: Request, exc: OidExplorerError
) -> JSONResponse:
    if classify_error(exc) == ErrorClass.STORE:
        _logger.error(
            "event=store_error path=%s error=%s",
            request.url.path,
            exc,
            exc_info=exc.__cause__ is not None,
        )
    else:
        _logger.debug(
            "event=lookup_rejected path=%s error=%s",
            request.url.path,
            exc,
        )
    return JSONResponse(
        status_code=status_code_for(exc),
        content={"error": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def handle_unexpected_error(
    request: Request, exc: Exception
) -> JSONResponse:
    _logger.exception(
        "event=unhandled_error path=%s", request.url.path
    )
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


app.include_router(health.router)
app.include_router(oids.router)
