"""
savings_api.api.errors

Translate exceptions into JSON responses at the application boundary.

Responsibilities:
- Map the domain error taxonomy (`savings_api.errors`) onto status codes.
- Turn request validation failures into 400s.
- Answer store failures and anything unexpected with a logged 500.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from savings_api.errors import SavingsApiError
from savings_api.observability.logging import get_logger

log = get_logger(__name__)


async def _domain_error(_: Request, exc: SavingsApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    missing = any(e.get("type") == "missing" for e in errors)
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": "Missing required fields" if missing else "Invalid request",
            "errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in errors],
        },
    )


async def _store_error(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    log.error("store_error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal Server Error"}
    )


async def _unexpected_error(_: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal Server Error"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SavingsApiError, _domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _store_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unexpected_error)
