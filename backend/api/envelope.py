"""
Response envelope and error handlers.

Successful responses: {"success": true, ...payload}
Errors: {"success": false, "error_code": str, "error_message": str}
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.models import PlaceValidationError

logger = logging.getLogger(__name__)

ERROR_SERVER_EXCEPTION = "server_exception"
ERROR_VALIDATION = "validation_error"
ERROR_NOT_IMPLEMENTED = "not_implemented"
ERROR_HTTP = "http_error"


def format_response(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {"success": True, **payload}


def format_error(error_code: str, error_message: str) -> Dict[str, Any]:
    return {"success": False, "error_code": error_code, "error_message": error_message}


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=format_error(ERROR_HTTP, str(exc.detail)))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("request validation failed for %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=422, content=format_error(ERROR_VALIDATION, _describe_validation_errors(exc)))


async def place_validation_handler(request: Request, exc: PlaceValidationError):
    return JSONResponse(status_code=400, content=format_error(ERROR_VALIDATION, str(exc)))


async def not_implemented_handler(request: Request, exc: NotImplementedError):
    return JSONResponse(
        status_code=501,
        content=format_error(ERROR_NOT_IMPLEMENTED, str(exc) or "Not implemented"),
    )


async def server_exception_handler(request: Request, exc: Exception):
    # Starlette re-raises after this response is sent; the server logs the traceback
    return JSONResponse(status_code=500, content=format_error(ERROR_SERVER_EXCEPTION, "Internal Server Error"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PlaceValidationError, place_validation_handler)
    app.add_exception_handler(NotImplementedError, not_implemented_handler)
    app.add_exception_handler(Exception, server_exception_handler)
