"""Host allowlist middleware."""

from collections.abc import Iterable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from hashbrowns.core.logging import get_logger
from hashbrowns.errors import Unauthorized

logger = get_logger(__name__)


class AllowedHostsMiddleware(BaseHTTPMiddleware):
    """Reject requests whose host is not on the configured allowlist.

    The check runs before routing, so a rejected request never reaches the
    content store whatever its method or path.
    """

    def __init__(self, app: ASGIApp, approved_hosts: Iterable[str]) -> None:
        """
        Initialize middleware.

        Args:
        ----
            app: The ASGI application
            approved_hosts: Hosts accepted, with port when non-default
        """
        super().__init__(app)
        self.approved_hosts = frozenset(h.strip().lower() for h in approved_hosts)

    def is_approved(self, host: str) -> bool:
        return host.strip().lower() in self.approved_hosts

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        host = request.headers.get("host", "")
        if not self.is_approved(host):
            error = Unauthorized()
            logger.warning(
                "host_rejected",
                host=host,
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(
                status_code=error.status_code,
                content={"message": error.message},
            )
        return await call_next(request)
