"""
Uniform JSON error envelope: {"success": false, "error": <message>}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers=None, **extra) -> JSONResponse:
    content = {"success": False, "error": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def describe_validation_error(error: dict) -> str:
    """Turn the first pydantic error into a short message naming the field"""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "body"
    if error.get("type") == "missing":
        return f"Missing required field: {field}"
    msg = error.get("msg", "Invalid value")
    # pydantic prefixes messages raised from validators
    msg = msg.removeprefix("Value error, ")
    if not loc:
        # Whole-model validators already name the field
        return msg
    return f"Invalid field: {field} ({msg})"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.status_code}: {exc.detail}")
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    message = describe_validation_error(errors[0]) if errors else "Invalid request"
    # ctx may hold the raw exception object, which is not JSON serializable
    details = [{k: v for k, v in e.items() if k in ("type", "loc", "msg")} for e in errors]
    return error_response(400, message, details=details)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, "Internal server error", message=str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
