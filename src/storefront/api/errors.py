"""Exception handlers rendering every failure as ``{success: false, error, message}``."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.errors import InvalidInput, StorefrontError, classify

logger = structlog.get_logger(__name__)


def error_response(error: StorefrontError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.kind, "message": error.message},
    )


async def storefront_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = classify(exc)
    logger.info(
        "Request failed",
        path=request.url.path,
        method=request.method,
        error=error.kind,
        status_code=error.status_code,
    )
    return error_response(error)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return error_response(InvalidInput("; ".join(messages) or "Invalid request"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(classify(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, storefront_error_handler)
    app.add_exception_handler(ObjectNotFoundError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
