"""Error handling middleware."""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import (
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from hashbrowns.core.logging import get_logger
from hashbrowns.errors import BadRequest, HashBrownsError

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _get_error_detail(exc: Exception) -> tuple[str, int]:
    """Get error message and status code from exception."""
    if isinstance(exc, HashBrownsError):
        return exc.message, exc.status_code
    if isinstance(exc, StarletteHTTPException):
        # Unsupported methods answer 400
        if exc.status_code == HTTP_405_METHOD_NOT_ALLOWED:
            error = BadRequest("Method not supported")
            return error.message, error.status_code
        return str(exc.detail), exc.status_code
    return INTERNAL_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR


def _log_error(
    request: Request, exc: Exception, message: str, status_code: int
) -> None:
    correlation_id = getattr(request.state, "correlation_id", None)
    fields = {
        "error_type": exc.__class__.__name__,
        "error_message": message,
        "status_code": status_code,
        "path": request.url.path,
        "method": request.method,
        "correlation_id": correlation_id,
    }
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("request_error", exc_info=exc, **fields)
    else:
        logger.info("request_rejected", **fields)


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle any exception and return a JSON response.

    Args:
    ----
        request: The request that caused the exception
        exc: The exception to handle

    Returns:
    -------
        A ``{"message": ...}`` response with the mapped status code
    """
    message, status_code = _get_error_detail(exc)
    _log_error(request, exc, message, status_code)

    response = JSONResponse(status_code=status_code, content={"message": message})
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        response.headers["X-Request-ID"] = correlation_id
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Route domain and routing errors through :func:`handle_exception`."""
    app.add_exception_handler(HashBrownsError, handle_exception)
    app.add_exception_handler(StarletteHTTPException, handle_exception)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Last line of defence turning stray exceptions into JSON errors."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and handle errors.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers or error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_exception(request, exc)
