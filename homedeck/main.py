"""
homedeck - SmartThings control surface

The main FastAPI application entry point. The desktop UI talks to the
device gateway through the routes mounted here.
"""

# Load .env file FIRST, before any other imports
# .env.local overrides .env for machine-specific settings (tokens, ports, etc.)
from pathlib import Path
from dotenv import load_dotenv
_env_root = Path(__file__).parent.parent
load_dotenv(_env_root / ".env", override=True)
load_dotenv(_env_root / ".env.local", override=True)

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api import router as api_router
from .capabilities import (
    ConfigurationError,
    DeviceGateway,
    RemoteError,
    TransportError,
)
from .config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("homedeck.main")


async def _configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": exc.message})


async def _transport_error(request: Request, exc: TransportError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": str(exc)})


async def _remote_error(request: Request, exc: RemoteError) -> JSONResponse:
    # Client errors (bad token, unknown device) pass through; the rest is upstream failure
    status_code = exc.status_code if 400 <= exc.status_code < 500 else 502
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def create_app(gateway: Optional[DeviceGateway] = None) -> FastAPI:
    """
    Build the application.

    Args:
        gateway: Pre-built gateway to serve; when omitted one is created
            from settings at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup ---
        logger.info("homedeck starting up...")
        owned: Optional[DeviceGateway] = None
        if getattr(app.state, "gateway", None) is None:
            owned = DeviceGateway.from_config(settings.smartthings)
            app.state.gateway = owned
            if not owned.has_token:
                logger.warning("No SmartThings token configured; set one via /settings/token")

        yield

        # --- Shutdown ---
        if owned is not None:
            await owned.aclose()
            app.state.gateway = None
        logger.info("homedeck shut down")

    app = FastAPI(
        title="homedeck",
        description="Control surface for SmartThings devices and scenes.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    app.add_exception_handler(ConfigurationError, _configuration_error)
    app.add_exception_handler(TransportError, _transport_error)
    app.add_exception_handler(RemoteError, _remote_error)

    # Include API routers with /api/v1 prefix
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "homedeck.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
