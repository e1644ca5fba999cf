"""JSON API routes for the mediadash server.

All endpoints are available under both ``/api/`` and ``/api/v1/``. Both
prefixes resolve to the same handler.
"""

from aiohttp import web

from mediadash.server.api.tdarr import get_tdarr_routes

__all__ = [
    "setup_api_routes",
]

_ROUTE_GETTERS = [
    get_tdarr_routes,
]


def setup_api_routes(app: web.Application) -> None:
    """Register all API routes under ``/api`` and ``/api/v1``.

    Args:
        app: aiohttp Application to configure.
    """
    for get_routes in _ROUTE_GETTERS:
        for method, suffix, handler in get_routes():
            app.router.add_route(method, f"/api{suffix}", handler)
            app.router.add_route(method, f"/api/v1{suffix}", handler)
