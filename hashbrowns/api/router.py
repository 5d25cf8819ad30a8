"""Store read/write routes."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from hashbrowns.content_store import ContentStore
from hashbrowns.core.logging import get_logger
from hashbrowns.errors import BadRequest

logger = get_logger(__name__)

router = APIRouter(default_response_class=JSONResponse)


def get_content_store(request: Request) -> ContentStore:
    """Dependency returning the store injected at app creation."""
    return request.app.state.content_store


@router.get("/")
async def read_content(
    request: Request, store: ContentStore = Depends(get_content_store)
) -> dict[str, str]:
    """Resolve the ``key`` query parameter to its stored content."""
    key = request.query_params.get("key")
    if not key:
        raise BadRequest("Keyless request")

    value = await store.get(key)
    return {"data": value}


@router.post("/")
async def write_content(
    request: Request, store: ContentStore = Depends(get_content_store)
) -> dict[str, str]:
    """Store the request body and return the key derived from it."""
    body = await request.body()
    # Lenient decoding that drops a leading BOM, matching how browsers read
    # request text
    content = body.decode("utf-8-sig", errors="replace")
    if not content:
        raise BadRequest("Invalid request")

    entry = await store.store_content(content)
    logger.info("content_stored", key=entry.key, size=len(body))
    return {"key": entry.key}


@router.get("/health")
async def health_check(
    request: Request, store: ContentStore = Depends(get_content_store)
) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns
    -------
        Dict containing health status information
    """
    healthy = await store.ping()
    return {
        "status": "healthy" if healthy else "degraded",
        "version": request.app.version,
        "backend": store.backend_name,
        "correlation_id": getattr(request.state, "correlation_id", None),
    }


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
