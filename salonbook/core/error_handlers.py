# salonbook/core/error_handlers.py
"""Render engine errors as {"error", "detail", "field"} JSON bodies"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from salonbook.core.exceptions import BookingEngineError, ValidationError

logger = logging.getLogger(__name__)


async def engine_error_handler(request: Request, exc: BookingEngineError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first pydantic/path/query error in the engine's error shape"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid request")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]

    error = ValidationError(message, field=".".join(location) or None)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingEngineError, engine_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
