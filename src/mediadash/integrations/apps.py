"""Resolution of dashboard apps to connection descriptors."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from mediadash.config.loader import load_config_set
from mediadash.config.models import AppConfig, ConfigSet, IntegrationConfig
from mediadash.integrations.errors import AppNotFoundError, WrongIntegrationError

logger = logging.getLogger(__name__)

ConfigSetLoader = Callable[[str, Path | None], ConfigSet]


def check_integration_type(
    integration: IntegrationConfig | None, kinds: Iterable[str]
) -> bool:
    """Return True if the integration is one of the given kinds.

    An app without an integration never matches.
    """
    if integration is None:
        return False
    return integration.type in set(kinds)


def resolve_app(
    app_id: str,
    config_name: str,
    *,
    kind: str,
    label: str,
    configs_dir: Path | None = None,
    loader: ConfigSetLoader = load_config_set,
) -> AppConfig:
    """Look up an app by id and check its integration kind.

    Args:
        app_id: Identifier of the app in the configuration set.
        config_name: Name of the configuration set.
        kind: Required integration type (e.g., "tdarr").
        label: Display name used in error messages (e.g., "Tdarr").
        configs_dir: Directory holding configuration sets.
        loader: Configuration set loader (injectable for tests).

    Returns:
        The matching AppConfig.

    Raises:
        ConfigSetNotFoundError: If the configuration set does not exist.
        AppNotFoundError: If no app has the given id.
        WrongIntegrationError: If the app uses a different integration.
    """
    config = loader(config_name, configs_dir)
    app = config.find_app(app_id)

    if app is None:
        raise AppNotFoundError(
            f'[{label} integration] App with ID "{app_id}" could not be found.'
        )

    if not check_integration_type(app.integration, [kind]):
        raise WrongIntegrationError(
            f'[{label} integration] App with ID "{app_id}" is not using '
            f"the {label} integration."
        )

    logger.debug("Resolved app %s (%s) to %s", app_id, app.name, app.url)
    return app
