"""Exception handlers producing the error envelope."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ecobreak.api.responses import failure
from ecobreak.services.exceptions import EcoBreakError

logger = structlog.get_logger(__name__)


async def handle_domain_error(request: Request, exc: EcoBreakError) -> JSONResponse:
    """Domain exceptions keep their status code and message."""
    error: Any = exc.error if exc.details is None else {"type": exc.error, "details": exc.details}
    logger.info(
        "request_rejected",
        path=request.url.path,
        status_code=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=failure(exc.message, error))


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(str(exc.detail), exc.detail),
        headers=exc.headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body, query and path validation failures are 400s."""
    details = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    logger.info("request_invalid", path=request.url.path, errors=len(details))
    return JSONResponse(
        status_code=400,
        content=failure("Datos de entrada inválidos", details),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content=failure("Error interno del servidor", "Internal Server Error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the app."""
    app.add_exception_handler(EcoBreakError, handle_domain_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
