"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from ulidkit.config import Config, GeneratorConfig
from ulidkit.service.app import create_app

# 2016-07-30T22:36:16.385Z
REFERENCE_MS = 1469918176385
REFERENCE_ULID = "01ARZ3NDEKTSV4RRFFQ69G5FAV"
REFERENCE_ULID_MS = 1469922850259


def fixed_source(data):
    """Random source that always returns ``data``."""
    return lambda: data


def int_encode(data):
    """Reference encoder: whole value as one integer, 5 bits per symbol."""
    alphabet = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
    n = int.from_bytes(data, "big")
    length = (len(data) * 8 + 4) // 5
    chars = []
    for _ in range(length):
        n, remainder = divmod(n, 32)
        chars.append(alphabet[remainder])
    return "".join(reversed(chars))


@pytest.fixture
def zero_source():
    """Random source yielding ten zero bytes."""
    return fixed_source(bytes(10))


@pytest.fixture
def max_source():
    """Random source yielding ten 0xFF bytes."""
    return fixed_source(b"\xff" * 10)


@pytest.fixture
def app_config():
    """Create test service config."""
    return Config(generator=GeneratorConfig(monotonic=True, max_batch=50))


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
