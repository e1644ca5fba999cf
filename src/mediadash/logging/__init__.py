"""Structured logging module for mediadash.

Provides configurable logging with JSON format support and file rotation.
Includes integration context support for per-operation log tagging.
"""

from mediadash.logging.config import configure_logging
from mediadash.logging.context import (
    IntegrationContextFilter,
    clear_integration_context,
    get_integration_context,
    integration_context,
    set_integration_context,
)
from mediadash.logging.handlers import JSONFormatter

__all__ = [
    "IntegrationContextFilter",
    "JSONFormatter",
    "clear_integration_context",
    "configure_logging",
    "get_integration_context",
    "integration_context",
    "set_integration_context",
]
