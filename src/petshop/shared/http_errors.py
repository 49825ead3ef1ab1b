"""Translate domain errors into enveloped HTTP responses.

Business-rule failures become 4xx responses carrying the domain's own
messages. Anything unexpected becomes an opaque 500; the details go to
the log only.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from petshop.shared.envelope import failure
from petshop.shared.errors import AuthenticationFailed, ConflictError, PermissionDenied

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def error_messages(exc) -> list[str]:
    """Flatten Protean's ``{field: [messages]}`` payload into a list of strings."""
    messages = getattr(exc, "messages", None)
    if messages is None:
        messages = exc.args[0] if exc.args else str(exc)

    if isinstance(messages, dict):
        flat = []
        for value in messages.values():
            flat.extend(value if isinstance(value, list | tuple) else [value])
        return [str(m) for m in flat]
    if isinstance(messages, list | tuple):
        return [str(m) for m in messages]
    return [str(messages)]


def _respond(status_code: int, exc) -> JSONResponse:
    errors = error_messages(exc)
    return JSONResponse(status_code=status_code, content=failure(errors[0] if errors else "", errors))


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Request rejected", path=request.url.path, errors=error_messages(exc))
    return _respond(400, exc)


async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return _respond(409, exc)


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _respond(404, exc)


async def handle_authentication_failed(request: Request, exc: AuthenticationFailed) -> JSONResponse:
    return JSONResponse(status_code=401, content=failure(exc.message))


async def handle_permission_denied(request: Request, exc: PermissionDenied) -> JSONResponse:
    logger.info("Permission denied", path=request.url.path, reason=exc.message)
    return JSONResponse(status_code=403, content=failure(exc.message))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content=failure("Invalid request", errors))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content=failure(INTERNAL_ERROR_MESSAGE))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConflictError, handle_conflict)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(AuthenticationFailed, handle_authentication_failed)
    app.add_exception_handler(PermissionDenied, handle_permission_denied)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
