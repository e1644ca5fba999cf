"""HTTP application for the dashboard API.

This module provides the aiohttp Application with a health check endpoint
and the integration JSON API.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path

from aiohttp import web

from mediadash import __version__
from mediadash.server.api import setup_api_routes

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    """Health check response payload."""

    status: str
    """Overall status: always 'healthy' while the server answers."""

    version: str
    """mediadash version string."""

    uptime_seconds: float
    """Seconds since the application was created."""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


async def health_handler(request: web.Request) -> web.Response:
    """Handle GET /health.

    Upstream services are not contacted; only the server itself is checked.
    """
    status = HealthStatus(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.monotonic() - request.app["started_at"], 3),
    )
    return web.json_response(status.to_dict())


def create_app(configs_dir: Path) -> web.Application:
    """Create and configure the aiohttp Application.

    Args:
        configs_dir: Directory holding the configuration sets that API
            requests refer to by name.

    Returns:
        Configured aiohttp Application instance.
    """
    app = web.Application()
    app["configs_dir"] = configs_dir
    app["started_at"] = time.monotonic()

    app.router.add_get("/health", health_handler)
    setup_api_routes(app)

    logger.debug("Created application serving configs from %s", configs_dir)
    return app
