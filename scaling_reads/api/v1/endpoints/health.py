"""Health check endpoints, used for liveness and readiness probes."""

from fastapi import APIRouter, Request

from scaling_reads.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Return readiness with the cache state.

    The service stays ready when the cache is down: reads fall through to
    the replicas, so an unavailable cache only degrades latency.
    """
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return ReadinessResponse(cache="disabled")
    ping = getattr(cache, "ping", None)
    available = await ping() if ping is not None else cache.is_available()
    return ReadinessResponse(cache="available" if available else "unavailable")
