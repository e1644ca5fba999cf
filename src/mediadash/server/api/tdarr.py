"""API handlers for the Tdarr dashboard widgets.

Endpoints:
    GET /api/tdarr/statistics - Library statistics
    GET /api/tdarr/workers - Active workers across all nodes
    GET /api/tdarr/queue - One page of the transcode (+ health check) queue

All endpoints take ``appId`` and ``configName`` query parameters. The queue
endpoint also takes ``showHealthChecksInQueue``, ``pageSize`` and ``page``.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable

from aiohttp import web
from pydantic import BaseModel, ValidationError

from mediadash.config.loader import ConfigError, ConfigSetNotFoundError
from mediadash.integrations.errors import AppNotFoundError, WrongIntegrationError
from mediadash.integrations.tdarr import (
    AppQuery,
    QueueQuery,
    TdarrConnectionError,
    TdarrSchemaError,
    get_queue,
    get_statistics,
    get_workers,
)
from mediadash.server.api.errors import (
    INVALID_CONFIG,
    NOT_FOUND,
    UPSTREAM_SCHEMA_MISMATCH,
    UPSTREAM_UNAVAILABLE,
    VALIDATION_FAILED,
    WRONG_INTEGRATION,
    api_error,
)

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.Response]]


def tdarr_errors(handler: Handler) -> Handler:
    """Translate integration exceptions into standard error responses."""

    @functools.wraps(handler)
    async def wrapper(request: web.Request) -> web.Response:
        try:
            return await handler(request)
        except ValidationError as e:
            return api_error(
                "Invalid query parameters",
                code=VALIDATION_FAILED,
                details=[
                    {"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ],
            )
        except (ConfigSetNotFoundError, AppNotFoundError) as e:
            return api_error(str(e), code=NOT_FOUND)
        except WrongIntegrationError as e:
            return api_error(str(e), code=WRONG_INTEGRATION)
        except ConfigError as e:
            return api_error(str(e), code=INVALID_CONFIG)
        except TdarrSchemaError as e:
            logger.error("Tdarr returned an unexpected response: %s", e)
            return api_error(
                "Tdarr returned an unexpected response",
                code=UPSTREAM_SCHEMA_MISMATCH,
                status=502,
            )
        except TdarrConnectionError as e:
            logger.warning("Tdarr request failed: %s", e)
            return api_error(str(e), code=UPSTREAM_UNAVAILABLE, status=502)

    return wrapper


def _parse_query(request: web.Request, model: type[BaseModel]) -> BaseModel:
    """Validate query string parameters against an input model.

    Raises:
        ValidationError: If parameters are missing or invalid.
    """
    return model.model_validate(dict(request.query))


@tdarr_errors
async def api_tdarr_statistics_handler(request: web.Request) -> web.Response:
    """Handle GET /api/tdarr/statistics.

    Returns:
        JSON response with TdarrStatistics payload.
    """
    query = _parse_query(request, AppQuery)
    statistics = await asyncio.to_thread(
        get_statistics, query, configs_dir=request.app["configs_dir"]
    )
    return web.json_response(statistics.to_dict())


@tdarr_errors
async def api_tdarr_workers_handler(request: web.Request) -> web.Response:
    """Handle GET /api/tdarr/workers.

    Returns:
        JSON response with a list of TdarrWorker payloads.
    """
    query = _parse_query(request, AppQuery)
    workers = await asyncio.to_thread(
        get_workers, query, configs_dir=request.app["configs_dir"]
    )
    return web.json_response([w.to_dict() for w in workers])


@tdarr_errors
async def api_tdarr_queue_handler(request: web.Request) -> web.Response:
    """Handle GET /api/tdarr/queue.

    Returns:
        JSON response with a QueuePage payload.
    """
    query = _parse_query(request, QueueQuery)
    page = await asyncio.to_thread(
        get_queue, query, configs_dir=request.app["configs_dir"]
    )
    return web.json_response(page.to_dict())


def get_tdarr_routes() -> list[tuple[str, str, Handler]]:
    """Return Tdarr API route definitions as (method, path_suffix, handler) tuples."""
    return [
        ("GET", "/tdarr/statistics", api_tdarr_statistics_handler),
        ("GET", "/tdarr/workers", api_tdarr_workers_handler),
        ("GET", "/tdarr/queue", api_tdarr_queue_handler),
    ]
