from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cartonizer.core.logging import configure_logging, request_id_var
from cartonizer.core.settings import settings
from cartonizer.db import init_db
from cartonizer.domain.errors import (
    CartonNotFoundError,
    CartonStateError,
    CartonizationError,
    CatalogUnavailableError,
    ConstraintViolationError,
    EnrichmentError,
    InfeasibleItemError,
    NoActiveCartonsError,
    NonPositiveValueError,
    SolutionNotFoundError,
    ValidationError,
)
from cartonizer.routers.auth import router as auth_router
from cartonizer.routers.cartons import router as cartons_router
from cartonizer.routers.health import router as health_router
from cartonizer.routers.packing import router as packing_router

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"

# looked up along the exception's MRO, most specific class first
ERROR_STATUS: dict[type[CartonizationError], int] = {
    ValidationError: 400,
    NonPositiveValueError: 400,
    CartonStateError: 400,
    CartonNotFoundError: 404,
    SolutionNotFoundError: 404,
    InfeasibleItemError: 422,
    NoActiveCartonsError: 422,
    EnrichmentError: 422,
    CatalogUnavailableError: 502,
    ConstraintViolationError: 500,
}


def status_for(exc: CartonizationError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or request_id
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response

    @app.exception_handler(CartonizationError)
    async def cartonization_error(request: Request, exc: CartonizationError):
        status = status_for(exc)
        if status >= 500:
            logger.error("Request failed: %s", exc)
        else:
            logger.warning("Request rejected (%s): %s", exc.code, exc)
        return JSONResponse(
            status_code=status,
            content={
                "error": exc.code,
                "detail": str(exc),
                "request_id": getattr(request.state, "request_id", request_id_var.get()),
            },
        )

    @app.on_event("startup")
    async def _startup():
        await init_db()
        logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)

    app.include_router(health_router)
    app.include_router(cartons_router)
    app.include_router(packing_router)
    app.include_router(auth_router)

    return app
