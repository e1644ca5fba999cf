"""Tdarr API client.

This module provides an HTTP client for the Tdarr v2 API endpoints used by
the dashboard: the statistics document, the node listing and the paginated
status tables. Responses are validated before they are returned.

Requests are never retried. Transport failures raise TdarrConnectionError
and responses that do not match the expected shape raise TdarrSchemaError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from mediadash.config.models import AppConfig
from mediadash.integrations.errors import IntegrationError
from mediadash.integrations.tdarr.schemas import (
    NODES_ADAPTER,
    NodeModel,
    StatisticsModel,
    StatusTablePageModel,
)

logger = logging.getLogger(__name__)

CRUDDB_PATH = "/api/v2/cruddb"
GET_NODES_PATH = "/api/v2/get-nodes"
STATUS_TABLES_PATH = "/api/v2/client/status-tables"

STATISTICS_COLLECTION = "StatisticsJSONDB"
STATISTICS_DOC_ID = "statistics"

TRANSCODE_QUEUE_TABLE = "table1"
HEALTH_CHECK_QUEUE_TABLE = "table4"

_DEFAULT_TIMEOUT_SECONDS = 30


class TdarrError(IntegrationError):
    """Base class for failures talking to Tdarr."""


class TdarrConnectionError(TdarrError):
    """Raised when a request to Tdarr fails at the transport or HTTP level."""


class TdarrSchemaError(TdarrError):
    """Raised when a Tdarr response does not have the expected shape."""


class TdarrClient:
    """HTTP client for the Tdarr v2 API.

    The underlying httpx.Client is created on first use. Use the client as a
    context manager, or call close(), to release it.
    """

    def __init__(self, app: AppConfig) -> None:
        """Initialize the client.

        Args:
            app: Connection descriptor of the Tdarr app.
        """
        self._base_url = app.url.rstrip("/")
        self._timeout = (
            app.integration.timeout_seconds
            if app.integration is not None
            else _DEFAULT_TIMEOUT_SECONDS
        )
        self._client: httpx.Client | None = None

    def __enter__(self) -> TdarrClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Any:
        """Send one request and decode the JSON body.

        Raises:
            TdarrConnectionError: If the request fails or returns non-2xx.
            TdarrSchemaError: If the body is not JSON.
        """
        client = self._get_client()
        try:
            response = client.request(method, path, json=body)
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise TdarrConnectionError(f"Cannot connect to Tdarr: {e}") from e
        except httpx.TimeoutException as e:
            raise TdarrConnectionError(f"Connection timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            raise TdarrConnectionError(f"HTTP error: {e}") from e
        except httpx.HTTPError as e:
            raise TdarrConnectionError(f"Request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise TdarrSchemaError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def _validate(
        schema: type[BaseModel] | TypeAdapter[Any], data: Any, what: str
    ) -> Any:
        """Validate decoded JSON against a model or adapter.

        Raises:
            TdarrSchemaError: If validation fails.
        """
        try:
            if isinstance(schema, TypeAdapter):
                return schema.validate_python(data)
            return schema.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Tdarr %s response failed validation (%d errors)",
                what,
                e.error_count(),
            )
            raise TdarrSchemaError(f"Unexpected {what} response: {e}") from e

    def get_statistics(self) -> StatisticsModel:
        """Fetch the stored statistics document.

        Returns:
            Validated StatisticsModel.

        Raises:
            TdarrConnectionError: If the request fails.
            TdarrSchemaError: If the document has an unexpected shape.
        """
        body = {
            "data": {
                "collection": STATISTICS_COLLECTION,
                "mode": "getById",
                "docID": STATISTICS_DOC_ID,
            },
        }
        data = self._request("POST", CRUDDB_PATH, body)
        return self._validate(StatisticsModel, data, "statistics")

    def get_nodes(self) -> dict[str, NodeModel]:
        """Fetch all processing nodes with their active workers.

        Returns:
            Mapping of node id to validated NodeModel.

        Raises:
            TdarrConnectionError: If the request fails.
            TdarrSchemaError: If the listing has an unexpected shape.
        """
        data = self._request("GET", GET_NODES_PATH)
        return self._validate(NODES_ADAPTER, data, "nodes")

    def get_status_table(
        self, table: str, start: int, page_size: int
    ) -> StatusTablePageModel:
        """Fetch one page of a status table.

        Args:
            table: Logical table name ("table1" transcode queue,
                "table4" health-check queue).
            start: Zero-based offset of the first row.
            page_size: Maximum number of rows.

        Returns:
            Validated StatusTablePageModel.

        Raises:
            TdarrConnectionError: If the request fails.
            TdarrSchemaError: If the page has an unexpected shape.
        """
        body = {
            "data": {
                "start": start,
                "pageSize": page_size,
                "filters": [],
                "sorts": [],
                "opts": {
                    "table": table,
                },
            },
        }
        logger.debug("Fetching Tdarr %s rows %d+%d", table, start, page_size)
        data = self._request("POST", STATUS_TABLES_PATH, body)
        return self._validate(StatusTablePageModel, data, f"{table} status table")
