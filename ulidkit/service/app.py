"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ulidkit import __version__
from ulidkit.config import load_config
from ulidkit.core.errors import DecodeError, RandomnessExhaustedError, TimestampRangeError, UlidError
from ulidkit.core.health import HealthChecker, check_clock, create_generator_check, create_source_check
from ulidkit.internal.logging import StructuredLogger, get_logger, parse_level
from ulidkit.monotonic import MonotonicGenerator
from ulidkit.service.routes import api, health
from ulidkit.utils.crash import create_async_handler

_ERROR_STATUS = (
    (DecodeError, 400),
    (TimestampRangeError, 422),
    (RandomnessExhaustedError, 503),
)


def error_status(exc):
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    # Configure structured logging
    StructuredLogger.configure(min_level=parse_level(config.logging.level))
    logger_instance = get_logger()

    # Create core components
    random_source = config.generator.random_source()
    generator = MonotonicGenerator(random_source=random_source, step=config.generator.step)
    health_checker = HealthChecker()
    health_checker.register("clock", check_clock, critical=True)
    health_checker.register("random_source", create_source_check(random_source), critical=True)
    health_checker.register("generator", create_generator_check(generator), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=__version__)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete", **generator.stats())

    app = FastAPI(
        title="ulidkit",
        version=__version__,
        description="ULID generation and inspection",
        lifespan=lifespan,
    )

    @app.exception_handler(UlidError)
    async def ulid_error_handler(request: Request, exc: UlidError):
        status_code = error_status(exc)
        logger_instance.warn("Request rejected", error=exc.args[0], error_id=exc.error_id,
                             path=request.url.path, status=status_code)
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": exc.args[0], "error_id": exc.error_id},
        )

    # Initialize route modules with dependencies
    api.init(generator, config.generator, random_source)
    health.init(generator, health_checker)

    # Include routers
    app.include_router(api.router)
    app.include_router(health.router)

    return app
