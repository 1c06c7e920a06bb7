import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.schemas import cart_schema, user_schema

log = logging.getLogger(__name__)

MESSAGES = {**cart_schema.MESSAGES, **user_schema.MESSAGES}


class ValidationFailed(Exception):
    """Raised by routes with every validation message collected for a payload."""

    def __init__(self, messages: List[str], error: str = "Validation failed"):
        super().__init__(error)
        self.error = error
        self.messages = list(messages)


def error_response(
    status_code: int,
    error: str,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    payload: Dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        payload["details"] = details
    return JSONResponse(payload, status_code=status_code, headers=headers)


def readable_errors(errors: List[Dict]) -> List[str]:
    """Turn pydantic error dicts into client-facing messages, de-duplicated."""
    messages = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = loc[-1] if loc else ""
        msg = MESSAGES.get((field, err.get("type", "")))
        if msg is None:
            msg = str(err.get("msg", "Invalid value")).replace("Value error, ", "")
            if err.get("type") != "value_error" and field:
                msg = f"{field}: {msg}"
        if msg not in messages:
            messages.append(msg)
    return messages


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        error = f"Route {request.method} {request.url.path} not found"
    else:
        error = exc.detail if isinstance(exc.detail, str) else "Request failed"
    details = None if isinstance(exc.detail, str) else exc.detail
    log.info(
        "HTTP error method=%s path=%s status=%s error=%s",
        request.method, request.url.path, exc.status_code, error,
    )
    return error_response(exc.status_code, error, details, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = readable_errors(exc.errors())
    log.info("Request validation failed path=%s errors=%s", request.url.path, messages)
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", messages)


async def validation_failed_handler(request: Request, exc: ValidationFailed):
    log.info("Payload validation failed path=%s errors=%s", request.url.path, exc.messages)
    return error_response(status.HTTP_400_BAD_REQUEST, exc.error, exc.messages)


async def unhandled_exception_handler(request: Request, exc: Exception):
    log.error(
        "Unhandled exception method=%s path=%s", request.method, request.url.path,
        exc_info=exc,
    )
    details = repr(exc) if settings.ENVIRONMENT == "development" else None
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", details
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
