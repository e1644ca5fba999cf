"""Tdarr dashboard operations.

Each operation resolves the app, performs one or two requests against
Tdarr and remaps the validated response. Nothing is cached or shared
between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from mediadash.config.models import AppConfig
from mediadash.integrations.apps import resolve_app
from mediadash.integrations.tdarr.client import (
    HEALTH_CHECK_QUEUE_TABLE,
    TRANSCODE_QUEUE_TABLE,
    TdarrClient,
)
from mediadash.integrations.tdarr.mapping import (
    queue_entry_from_row,
    statistics_from_model,
    workers_from_nodes,
)
from mediadash.integrations.tdarr.models import (
    Number,
    QueueEntry,
    QueueEntryType,
    QueuePage,
    TdarrStatistics,
    TdarrWorker,
)
from mediadash.integrations.tdarr.queries import AppQuery, QueueQuery
from mediadash.logging.context import integration_context

logger = logging.getLogger(__name__)

INTEGRATION_TYPE = "tdarr"

ClientFactory = Callable[[AppConfig], TdarrClient]


def get_tdarr_app(
    app_id: str, config_name: str, configs_dir: Path | None = None
) -> AppConfig:
    """Resolve an app that must use the Tdarr integration.

    Raises:
        ConfigSetNotFoundError: If the configuration set does not exist.
        AppNotFoundError: If no app has the given id.
        WrongIntegrationError: If the app is not a Tdarr app.
    """
    return resolve_app(
        app_id,
        config_name,
        kind=INTEGRATION_TYPE,
        label="Tdarr",
        configs_dir=configs_dir,
    )


def get_statistics(
    query: AppQuery,
    *,
    configs_dir: Path | None = None,
    client_factory: ClientFactory = TdarrClient,
) -> TdarrStatistics:
    """Fetch library statistics from the stored statistics document."""
    with integration_context(INTEGRATION_TYPE, query.app_id):
        app = get_tdarr_app(query.app_id, query.config_name, configs_dir)
        with client_factory(app) as client:
            document = client.get_statistics()

        statistics = statistics_from_model(document)
        logger.debug("Fetched statistics for %d libraries", len(statistics.pies))
        return statistics


def get_workers(
    query: AppQuery,
    *,
    configs_dir: Path | None = None,
    client_factory: ClientFactory = TdarrClient,
) -> list[TdarrWorker]:
    """Fetch every active worker across all Tdarr nodes."""
    with integration_context(INTEGRATION_TYPE, query.app_id):
        app = get_tdarr_app(query.app_id, query.config_name, configs_dir)
        with client_factory(app) as client:
            nodes = client.get_nodes()

        workers = workers_from_nodes(nodes)
        logger.debug("Fetched %d workers from %d nodes", len(workers), len(nodes))
        return workers


def health_check_offset(first_item_index: int, transcode_total: Number) -> Number:
    """Offset into the health-check table for a combined-queue page.

    The combined queue is every transcode entry followed by every
    health-check entry, so the health-check offset is the requested offset
    minus the transcode entries before it, floored at zero.
    """
    return max(first_item_index - transcode_total, 0)


def build_queue_page(
    entries: list[QueueEntry], total_count: Number, first_item_index: int
) -> QueuePage:
    return QueuePage(
        entries=tuple(entries),
        total_count=total_count,
        start_index=first_item_index,
        end_index=first_item_index + len(entries) - 1,
    )


def get_queue(
    query: QueueQuery,
    *,
    configs_dir: Path | None = None,
    client_factory: ClientFactory = TdarrClient,
) -> QueuePage:
    """Fetch one page of the transcode queue, optionally followed by health checks.

    With health checks shown, the page is a window over the virtual
    sequence "all transcode entries, then all health-check entries". The
    health-check table is always requested after the transcode table, even
    when the transcode page alone fills the window; the concatenation is
    then truncated to page_size.
    """
    with integration_context(INTEGRATION_TYPE, query.app_id):
        app = get_tdarr_app(query.app_id, query.config_name, configs_dir)
        first_item_index = query.page * query.page_size

        with client_factory(app) as client:
            transcode_page = client.get_status_table(
                TRANSCODE_QUEUE_TABLE, first_item_index, query.page_size
            )
            transcode_entries = [
                queue_entry_from_row(row, QueueEntryType.TRANSCODE)
                for row in transcode_page.array
            ]

            if not query.show_health_checks_in_queue:
                return build_queue_page(
                    transcode_entries, transcode_page.total_count, first_item_index
                )

            health_check_page = client.get_status_table(
                HEALTH_CHECK_QUEUE_TABLE,
                health_check_offset(first_item_index, transcode_page.total_count),
                query.page_size,
            )

        health_check_entries = [
            queue_entry_from_row(row, QueueEntryType.HEALTH_CHECK)
            for row in health_check_page.array
        ]
        combined = (transcode_entries + health_check_entries)[: query.page_size]

        logger.debug(
            "Queue page %d: %d transcode + %d health check rows, %d kept",
            query.page,
            len(transcode_entries),
            len(health_check_entries),
            len(combined),
        )
        return build_queue_page(
            combined,
            transcode_page.total_count + health_check_page.total_count,
            first_item_index,
        )
