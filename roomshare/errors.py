"""
Problem+json error responses.

Every error leaves the API as ``{type, title, status, detail, instance,
code, errors}`` where ``code`` is the error kind (``TimeConflict``,
``NotOwner``, ...).
"""

from http import HTTPStatus
import logging
from typing import Any, Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.enums import ErrorKind
from .core.exceptions import DomainException

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"
GENERIC_ERROR_DETAIL = "An error occurred processing your request"


def problem_response(
    request: Request,
    status: int,
    *,
    code: Optional[str] = None,
    detail: Optional[str] = None,
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    try:
        title = HTTPStatus(status).phrase
    except ValueError:
        title = "Error"

    body: dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status,
        "detail": detail or "",
        "instance": request.url.path,
    }
    if code:
        body["code"] = code
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return JSONResponse(body, status_code=status, media_type=PROBLEM_MEDIA_TYPE, headers=headers)


def _from_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Unpack ``HTTPException.detail``.

    Domain exceptions put ``{message, code, details}`` there; plain FastAPI
    errors carry a string.
    """
    detail = exc.detail
    code = None
    errors = None
    if isinstance(detail, dict):
        code = detail.get("code") if isinstance(detail.get("code"), str) else None
        errors = detail.get("details") or detail.get("errors")
        message = detail.get("message") or detail.get("detail")
        detail = message if isinstance(message, str) else None
    elif detail is not None and not isinstance(detail, str):
        detail = str(detail)

    return problem_response(
        request,
        exc.status_code,
        code=code,
        detail=detail,
        errors=errors,
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Service failure on %s: %s", request.url.path, exc.message)
        return _from_http_exception(request, exc.to_http_exception())

    # fastapi.HTTPException subclasses the Starlette one, so this covers both
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _from_http_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return problem_response(
            request,
            400,
            code=ErrorKind.INVALID_INPUT.value,
            detail="Request validation failed",
            errors=exc.errors(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s", request.url.path)
        return problem_response(
            request, 500, code=ErrorKind.UNEXPECTED.value, detail=GENERIC_ERROR_DETAIL
        )
