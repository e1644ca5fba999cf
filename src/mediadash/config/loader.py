"""Configuration loading.

Runtime settings are resolved with the following precedence (highest first):
1. CLI arguments (passed directly to get_settings)
2. Environment variables (MEDIADASH_*)
3. Default values

Environment variables:
- MEDIADASH_CONFIG_DIR: Directory holding configuration sets
  (default ~/.mediadash/configs)
- MEDIADASH_LOG_LEVEL: debug, info, warning or error
- MEDIADASH_LOG_FORMAT: text or json
- MEDIADASH_LOG_FILE: Path to a rotating log file
- MEDIADASH_SERVER_BIND: Address for `mediadash serve`
- MEDIADASH_SERVER_PORT: Port for `mediadash serve`

Configuration sets are YAML files named <name>.yaml in the configs
directory. Each holds the list of dashboard apps:

    apps:
      - id: 2f1c6e5a
        name: Tdarr
        url: http://tdarr.lan:8265
        integration:
          type: tdarr
          timeout_seconds: 30
"""

from __future__ import annotations

import logging
import re
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from mediadash.config.env import EnvReader
from mediadash.config.models import (
    AppConfig,
    ConfigSet,
    IntegrationConfig,
    LoggingConfig,
    ServerConfig,
    Settings,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".mediadash"
DEFAULT_CONFIGS_DIR = DEFAULT_DATA_DIR / "configs"

_CONFIG_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


class ConfigError(Exception):
    """Error loading or validating a configuration set."""


class ConfigSetNotFoundError(ConfigError):
    """Configuration set does not exist."""


def get_configs_directory(env_reader: EnvReader | None = None) -> Path:
    """Get the configuration sets directory.

    Can be overridden by the MEDIADASH_CONFIG_DIR environment variable.
    """
    reader = env_reader or EnvReader()
    return reader.get_path("MEDIADASH_CONFIG_DIR", DEFAULT_CONFIGS_DIR)


def get_settings(
    configs_dir: Path | None = None,
    log_level: str | None = None,
    log_format: str | None = None,
    log_file: Path | None = None,
    bind: str | None = None,
    port: int | None = None,
    env_reader: EnvReader | None = None,
) -> Settings:
    """Build runtime settings with full precedence handling.

    Args:
        configs_dir: CLI override for the configuration sets directory.
        log_level: CLI override for log level.
        log_format: CLI override for log format.
        log_file: CLI override for log file path.
        bind: CLI override for server bind address.
        port: CLI override for server port.
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        Settings with merged configuration.

    Raises:
        ValueError: If a merged value fails validation.
    """
    reader = env_reader or EnvReader()
    defaults_logging = LoggingConfig()
    defaults_server = ServerConfig()

    logging_config = LoggingConfig(
        level=log_level
        or reader.get_str("MEDIADASH_LOG_LEVEL", defaults_logging.level),
        format=log_format
        or reader.get_str("MEDIADASH_LOG_FORMAT", defaults_logging.format),
        file=log_file or reader.get_path("MEDIADASH_LOG_FILE"),
    )
    server_config = ServerConfig(
        bind=bind or reader.get_str("MEDIADASH_SERVER_BIND", defaults_server.bind),
        port=port
        if port is not None
        else reader.get_int("MEDIADASH_SERVER_PORT", defaults_server.port),
    )

    return Settings(
        configs_dir=configs_dir or get_configs_directory(reader),
        logging=logging_config,
        server=server_config,
    )


def list_config_sets(configs_dir: Path) -> list[str]:
    """List available configuration set names (sorted)."""
    if not configs_dir.exists():
        return []

    return sorted(
        p.stem
        for p in configs_dir.glob("*.yaml")
        if p.is_file() and not p.name.startswith(".")
    )


def _parse_app(entry: Any, config_name: str) -> AppConfig:
    """Construct an AppConfig from one YAML entry.

    Raises:
        ConfigError: If the entry is malformed or has unknown keys.
    """
    if not isinstance(entry, dict):
        raise ConfigError(
            f"Invalid app entry in config '{config_name}': expected a mapping"
        )

    expected_fields = {f.name for f in fields(AppConfig)}
    unknown_keys = set(entry.keys()) - expected_fields
    if unknown_keys:
        raise ConfigError(
            f"Unknown keys in app entry of config '{config_name}': "
            f"{sorted(unknown_keys)}. Valid keys are: {sorted(expected_fields)}"
        )

    data = dict(entry)
    integration_data = data.pop("integration", None)
    try:
        integration = None
        if integration_data is not None:
            if not isinstance(integration_data, dict):
                raise ConfigError(
                    f"Invalid integration in config '{config_name}': "
                    "expected a mapping"
                )
            integration = IntegrationConfig(**integration_data)
        return AppConfig(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            url=str(data.get("url", "")),
            integration=integration,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid app entry in config '{config_name}': {e}") from e


def load_config_set(name: str, configs_dir: Path | None = None) -> ConfigSet:
    """Load a configuration set by name.

    The file is read on every call; nothing is cached between requests.

    Args:
        name: Configuration set name (without .yaml extension).
        configs_dir: Directory to load from. Defaults to get_configs_directory().

    Returns:
        Loaded ConfigSet.

    Raises:
        ConfigSetNotFoundError: If no file exists for the name.
        ConfigError: If the name or the file content is invalid.
    """
    if not _CONFIG_NAME_PATTERN.match(name):
        raise ConfigError(f"Config name must be alphanumeric (with - or _): {name}")

    directory = configs_dir or get_configs_directory()
    config_path = directory / f"{name}.yaml"

    if not config_path.exists():
        raise ConfigSetNotFoundError(f"Configuration not found: {name}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {name}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {name} must be a mapping at the top level")

    raw_apps = data.get("apps") or []
    if not isinstance(raw_apps, list):
        raise ConfigError(f"'apps' in config {name} must be a list")

    apps = tuple(_parse_app(entry, name) for entry in raw_apps)
    logger.debug("Loaded config %s with %d apps from %s", name, len(apps), config_path)
    return ConfigSet(name=name, apps=apps)
