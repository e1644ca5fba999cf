"""Configuration management for mediadash.

Runtime settings come from CLI flags, MEDIADASH_* environment variables and
defaults. Dashboard apps live in named YAML configuration sets.
"""

from mediadash.config.env import EnvReader
from mediadash.config.loader import (
    ConfigError,
    ConfigSetNotFoundError,
    get_configs_directory,
    get_settings,
    list_config_sets,
    load_config_set,
)
from mediadash.config.models import (
    AppConfig,
    ConfigSet,
    IntegrationConfig,
    LoggingConfig,
    ServerConfig,
    Settings,
)

__all__ = [
    # Models
    "AppConfig",
    "ConfigSet",
    "IntegrationConfig",
    "LoggingConfig",
    "ServerConfig",
    "Settings",
    # Loader
    "ConfigError",
    "ConfigSetNotFoundError",
    "EnvReader",
    "get_configs_directory",
    "get_settings",
    "list_config_sets",
    "load_config_set",
]
