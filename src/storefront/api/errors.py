"""Translate domain exceptions into ``{"message": ...}`` HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.shared.errors import UniquenessConflict, error_message

logger = structlog.get_logger(__name__)


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Request is malformed."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


async def _not_found(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"message": error_message(exc)})


async def _conflict(request: Request, exc: UniquenessConflict):
    return JSONResponse(status_code=409, content={"message": error_message(exc)})


async def _rejected(request: Request, exc: ValidationError):
    logger.info(
        "Request rejected",
        path=request.url.path,
        error=exc.__class__.__name__,
        reason=error_message(exc),
    )
    return JSONResponse(status_code=400, content={"message": error_message(exc)})


async def _malformed(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": _describe_request_error(exc)})


async def _unhandled(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path, error=exc.__class__.__name__)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on ``app``.

    Handlers are matched on the closest class in the exception's MRO, so
    ``UniquenessConflict`` wins over its ``ValidationError`` base.
    """
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(UniquenessConflict, _conflict)
    app.add_exception_handler(ValidationError, _rejected)
    app.add_exception_handler(RequestValidationError, _malformed)
    app.add_exception_handler(Exception, _unhandled)
