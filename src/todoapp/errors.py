"""Application-level exception handling helpers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import Response

from .core.context import request_id_scope
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = message
        self.code = code
        self.status_code = status_code
        self.details = details


class InvalidBodyError(ApplicationError):
    """Request body is missing, malformed or carries invalid field values."""

    def __init__(
        self,
        message: str = "Invalid request body.",
        *,
        code: str = "invalid_body",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class MalformedHeaderError(ApplicationError):
    """Authentication header is missing or not ``base64(user):base64(password)``."""

    def __init__(
        self,
        message: str = "Malformed authentication header.",
        *,
        code: str = "malformed_header",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class NotAuthenticatedError(ApplicationError):
    """Unknown user or password mismatch."""

    def __init__(
        self,
        message: str = "User not found or password does not match.",
        *,
        code: str = "not_authenticated",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
        )


class ForbiddenError(ApplicationError):
    """Authenticated caller does not own the requested resource."""

    def __init__(
        self,
        message: str = "Task belongs to another user.",
        *,
        code: str = "forbidden",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class NotFoundError(ApplicationError):
    """Error representing missing resources."""

    def __init__(
        self,
        message: str = "Resource not found.",
        *,
        code: str = "not_found",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class AlreadyExistsError(ApplicationError):
    """Error raised when a unique key is already registered."""

    def __init__(
        self,
        message: str = "Resource already exists.",
        *,
        code: str = "already_exists",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class UnroutableRequestError(Exception):
    """Raised when a path segment does not match any known route shape."""


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _echo_request_id(request: Request, response: Response) -> Response:
    request_id = _request_id(request)
    if request_id:
        header_name = request.app.state.settings.request_id_header
        response.headers.setdefault(header_name, request_id)
    return response


def _merge_details_with_request(request: Request, details: Any | None) -> Any | None:
    request_id = _request_id(request)
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        if "request_id" not in details:
            return {**details, "request_id": request_id}
        return details
    return {"request_id": request_id, "detail": details}


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
) -> Response:
    payload = ErrorResponse(
        code=code,
        message=message,
        details=_merge_details_with_request(request, details),
    )
    return _echo_request_id(
        request,
        JSONResponse(status_code=status_code, content=payload.model_dump()),
    )


def _bare_bad_request(request: Request) -> Response:
    return _echo_request_id(request, Response(status_code=status.HTTP_400_BAD_REQUEST))


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(
        request: Request,
        exc: ApplicationError,
    ) -> Response:
        with request_id_scope(_request_id(request)):
            logger.warning(
                exc.message,
                extra={"code": exc.code, "status_code": exc.status_code},
            )
        return _error_response(
            request,
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )

    @app.exception_handler(UnroutableRequestError)
    async def _handle_unroutable_request(
        request: Request,
        exc: UnroutableRequestError,
    ) -> Response:
        with request_id_scope(_request_id(request)):
            logger.warning(
                "URI does not match any route",
                extra={"method": request.method, "path": request.url.path},
            )
        return _bare_bad_request(request)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> Response:
        # Only the router raises these: unknown path or method.
        with request_id_scope(_request_id(request)):
            logger.warning(
                "URI does not match any route",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": exc.status_code,
                },
            )
        return _bare_bad_request(request)

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(
        request: Request,
        exc: Exception,
    ) -> Response:
        # Runs outside the middleware, so the request id must be rebound here.
        with request_id_scope(_request_id(request)):
            logger.exception("Unhandled application error.")
        return _error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code="server_error",
            message="Internal server error.",
        )


__all__ = [
    "AlreadyExistsError",
    "ApplicationError",
    "ForbiddenError",
    "InvalidBodyError",
    "MalformedHeaderError",
    "NotAuthenticatedError",
    "NotFoundError",
    "UnroutableRequestError",
    "register_exception_handlers",
]
