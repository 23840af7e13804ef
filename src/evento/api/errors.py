"""Exception -> HTTP response mapping. Every error body carries an ``error`` message."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as FastAPIValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from evento.core.errors import (
    EventoError,
    IllegalTransition,
    InvalidTemplate,
    NotFound,
    PropertyConstraintViolation,
    RequestValidationError,
    UnboundReference,
    UnknownComponentType,
)
from evento.core.logging_config import get_logger

logger = get_logger(__name__)

_STATUS: dict[type[EventoError], int] = {
    InvalidTemplate: 400,
    UnknownComponentType: 400,
    UnboundReference: 400,
    PropertyConstraintViolation: 400,
    RequestValidationError: 400,
    NotFound: 404,
    IllegalTransition: 409,
}


def status_for(exc: EventoError) -> int:
    for error_type, status in _STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


def error_body(exc: EventoError) -> dict:
    body: dict = {"error": str(exc)}
    violations = getattr(exc, "violations", None)
    if violations:
        body["details"] = [v.to_dict() for v in violations]
    if isinstance(exc, UnboundReference):
        body["details"] = [{"nodeId": exc.node_id, "property": exc.property, "path": exc.path}]
    return body


async def handle_engine_error(request: Request, exc: EventoError) -> JSONResponse:
    status = status_for(exc)
    log = logger.error if status >= 500 else logger.info
    log("request_failed", path=request.url.path, status=status, error=str(exc), kind=type(exc).__name__)
    return JSONResponse(status_code=status, content=error_body(exc))


async def handle_validation_error(request: Request, exc: FastAPIValidationError | ValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.info("request_invalid", path=request.url.path, errors=len(errors))
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first.get('msg')}" if location else "Invalid request"
    details = [
        {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]
    return JSONResponse(status_code=400, content={"error": message, "details": details})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), kind=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EventoError, handle_engine_error)
    app.add_exception_handler(FastAPIValidationError, handle_validation_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = ["status_for", "error_body", "register_error_handlers"]
