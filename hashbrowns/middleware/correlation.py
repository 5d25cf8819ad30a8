"""Correlation ID middleware for request tracking."""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from structlog.contextvars import bind_contextvars, clear_contextvars

HEADER_NAME = "X-Request-ID"


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle request correlation IDs.

    Assigns a unique correlation ID to each request and adds it to:
    - Request state
    - Response headers
    - Structured logging context
    """

    @staticmethod
    def _parse_correlation_id(value: str | None) -> str | None:
        """Canonical form of a caller supplied UUID, None for anything else."""
        if not value:
            return None

        try:
            return str(uuid.UUID(value))
        except (ValueError, AttributeError, TypeError):
            return None

    def _get_correlation_id(self, request: Request) -> str:
        """
        Get or generate a correlation ID.

        Args:
        ----
            request: The incoming request

        Returns:
        -------
            str: The caller's ID when valid, otherwise a new UUID4
        """
        header_value = request.headers.get(HEADER_NAME, "")
        return self._parse_correlation_id(header_value) or str(uuid.uuid4())

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_contextvars()

        correlation_id = self._get_correlation_id(request)
        bind_contextvars(correlation_id=correlation_id)
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[HEADER_NAME] = correlation_id
        return response
