"""Health and observability routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ulidkit.core.health import Status
from ulidkit.utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["health"])

# These will be set by app.py
_generator = None
_health_checker = None


def init(generator, health_checker):
    """Initialize with generator and health checker references."""
    global _generator, _health_checker
    _generator = generator
    _health_checker = health_checker


@router.get("/health")
async def health():
    """Health check with component status."""
    report = await _health_checker.check()
    status_code = 200 if report.status != Status.FAIL else 503
    return JSONResponse(content=report.to_dict(), status_code=status_code)


@router.get("/heartbeat")
async def heartbeat():
    """Lightweight heartbeat for frequent polling."""
    last = _generator.last
    return {
        "status": "ok",
        "timestamp": format_timestamp(),
        "issued": _generator.issued,
        "last": last.encode() if last is not None else None,
    }
