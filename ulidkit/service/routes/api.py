"""Identifier generation, inspection and stats routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ulidkit.core.errors import TimestampRangeError
from ulidkit.identifier import Identifier
from ulidkit.service.auth import require_operator
from ulidkit.utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["ulid"])

# These will be set by app.py
_generator = None
_config = None
_random_source = None
_counters = {"generated": 0, "decoded": 0}


def init(generator, generator_config, random_source=None):
    """Initialize with the monotonic generator, its config and random source."""
    global _generator, _config, _random_source
    _generator = generator
    _config = generator_config
    _random_source = random_source
    _counters.update(generated=0, decoded=0)


@router.get("/ulid")
async def generate(
    count: int = Query(1, ge=1),
    timestamp: Optional[int] = None,
    monotonic: Optional[bool] = None,
):
    """Generate ``count`` identifiers, optionally at a fixed millisecond."""
    if count > _config.max_batch:
        raise HTTPException(status_code=422, detail=f"count exceeds max_batch ({_config.max_batch})")
    if monotonic is None:
        monotonic = _config.monotonic

    if monotonic:
        ulids = [_generator.generate_str(timestamp) for _ in range(count)]
    else:
        ulids = [Identifier.create(timestamp, _random_source).encode() for _ in range(count)]
    _counters["generated"] += count
    return {"timestamp": format_timestamp(), "ulids": ulids}


@router.get("/ulid/{value}")
async def inspect(value: str):
    """Decode ``value`` into its timestamp and randomness."""
    ident = Identifier.parse(value)
    _counters["decoded"] += 1
    millis = ident.to_timestamp()
    try:
        iso = ident.to_datetime(is_utc=True).isoformat()
    except TimestampRangeError:
        iso = None
    return {
        "ulid": ident.encode(),
        "timestamp_ms": millis,
        "datetime": iso,
        "randomness_hex": bytes(ident.randomness).hex(),
        "bytes_hex": bytes(ident).hex(),
        "uuid": str(ident.to_uuid()),
    }


@router.get("/stats")
async def stats(username=Depends(require_operator)):
    """Return generator and request counters (requires basic auth)."""
    return {
        "timestamp": format_timestamp(),
        "generator": _generator.stats(),
        "requests": dict(_counters),
    }
