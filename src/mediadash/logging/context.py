"""Integration context for structured logging.

Uses contextvars so the integration name and app id of the operation in
progress are attached to every log record emitted while it runs, including
records from worker threads started with asyncio.to_thread.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_integration: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "integration", default=None
)
_app_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "app_id", default=None
)


def set_integration_context(integration: str, app_id: str | None = None) -> None:
    """Set the current integration context.

    Args:
        integration: Integration name (e.g., "tdarr").
        app_id: Identifier of the app being queried.
    """
    _integration.set(integration)
    _app_id.set(app_id)


def clear_integration_context() -> None:
    """Clear the current integration context."""
    _integration.set(None)
    _app_id.set(None)


@contextmanager
def integration_context(
    integration: str, app_id: str | None = None
) -> Generator[None, None, None]:
    """Context manager for an integration operation.

    Sets the context on entry and restores the previous one on exit.

    Example:
        with integration_context("tdarr", "2f1c6e5a"):
            logger.info("Fetching workers")  # Automatically includes context
    """
    old_integration = _integration.get()
    old_app_id = _app_id.get()
    try:
        set_integration_context(integration, app_id)
        yield
    finally:
        _integration.set(old_integration)
        _app_id.set(old_app_id)


def get_integration_context() -> tuple[str | None, str | None]:
    """Get current integration context as (integration, app_id)."""
    return _integration.get(), _app_id.get()


class IntegrationContextFilter(logging.Filter):
    """Logging filter that injects integration context into log records.

    Adds integration and app_id attributes for JSON output, and a compact
    context_tag like "[tdarr:2f1c6e5a] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject integration context into log record.

        Returns:
            Always True (does not filter, only enriches).
        """
        integration, app_id = get_integration_context()

        record.integration = integration
        record.app_id = app_id

        if integration:
            if app_id:
                record.context_tag = f"[{integration}:{app_id}] "
            else:
                record.context_tag = f"[{integration}] "
        else:
            record.context_tag = ""

        return True
