"""Tdarr integration.

Reads library statistics, active workers and the transcode/health-check
queue from a Tdarr server and reshapes them for the dashboard.
"""

from mediadash.integrations.tdarr.client import (
    TdarrClient,
    TdarrConnectionError,
    TdarrError,
    TdarrSchemaError,
)
from mediadash.integrations.tdarr.models import (
    LibraryPie,
    PieSegment,
    QueueEntry,
    QueueEntryType,
    QueuePage,
    TdarrStatistics,
    TdarrWorker,
)
from mediadash.integrations.tdarr.queries import AppQuery, QueueQuery
from mediadash.integrations.tdarr.service import (
    get_queue,
    get_statistics,
    get_tdarr_app,
    get_workers,
)

__all__ = [
    "AppQuery",
    "LibraryPie",
    "PieSegment",
    "QueueEntry",
    "QueueEntryType",
    "QueuePage",
    "QueueQuery",
    "TdarrClient",
    "TdarrConnectionError",
    "TdarrError",
    "TdarrSchemaError",
    "TdarrStatistics",
    "TdarrWorker",
    "get_queue",
    "get_statistics",
    "get_tdarr_app",
    "get_workers",
]
