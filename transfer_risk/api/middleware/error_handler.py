"""Exception handlers mapping risk-core errors to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from transfer_risk.domains.exceptions import (
    AccountNotFoundError,
    ComplianceCheckUnavailableError,
    StoreUnavailableError,
)

logger = structlog.get_logger()


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error(status_code: int, error: str, message: str, request_id: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "request_id": request_id, **extra},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    request_id = _request_id(request)
    logger.warning("bad_request", request_id=request_id, errors=len(exc.errors()))
    return _error(
        400,
        "bad_request",
        "Malformed transfer request",
        request_id,
        details=jsonable_encoder(exc.errors()),
    )


async def not_found_handler(request: Request, exc: AccountNotFoundError) -> JSONResponse:
    request_id = _request_id(request)
    logger.warning("not_found", request_id=request_id, error=str(exc))
    return _error(404, "not_found", str(exc), request_id)


async def dependency_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id(request)
    check_id = getattr(exc, "check_id", None)
    logger.error("dependency_unavailable", request_id=request_id, check_id=check_id, error=str(exc))
    return _error(503, "dependency_unavailable", str(exc), request_id, check_id=check_id)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id(request)
    logger.exception("unhandled_exception", request_id=request_id, error=str(exc))
    return _error(500, "internal_server_error", "An unexpected error occurred", request_id)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AccountNotFoundError, not_found_handler)
    app.add_exception_handler(ComplianceCheckUnavailableError, dependency_unavailable_handler)
    app.add_exception_handler(StoreUnavailableError, dependency_unavailable_handler)
    app.add_exception_handler(Exception, global_exception_handler)
