"""Dashboard integrations for external media services."""

from mediadash.integrations.apps import check_integration_type, resolve_app
from mediadash.integrations.errors import (
    AppNotFoundError,
    IntegrationError,
    IntegrationInputError,
    WrongIntegrationError,
)

__all__ = [
    "AppNotFoundError",
    "IntegrationError",
    "IntegrationInputError",
    "WrongIntegrationError",
    "check_integration_type",
    "resolve_app",
]
