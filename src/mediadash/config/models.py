"""Configuration data models.

Connection descriptors for dashboard apps and the runtime settings of the
mediadash process itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class IntegrationConfig:
    """Integration attached to an app."""

    type: str
    """Integration kind (e.g., "tdarr")."""

    timeout_seconds: int = 30
    """Request timeout in seconds (1-300)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.type, str):
            raise TypeError(f"Integration type must be a string, got {self.type!r}")
        if not self.type.strip():
            raise ValueError("Integration type is required")
        if isinstance(self.timeout_seconds, bool) or not isinstance(
            self.timeout_seconds, int
        ):
            raise TypeError("Timeout must be an integer number of seconds")
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")


@dataclass(frozen=True)
class AppConfig:
    """An app registered in a configuration set.

    Acts as the connection descriptor handed to integration clients.
    """

    id: str
    name: str
    url: str
    """Base URL of the service (e.g., "http://localhost:8265")."""

    integration: IntegrationConfig | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.id:
            raise ValueError("App id is required")
        if not isinstance(self.url, str):
            raise TypeError(f"URL must be a string, got {self.url!r}")
        if not self.url.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")


@dataclass(frozen=True)
class ConfigSet:
    """A named set of dashboard apps, loaded from <configs_dir>/<name>.yaml."""

    name: str
    apps: tuple[AppConfig, ...] = ()

    def find_app(self, app_id: str) -> AppConfig | None:
        """Return the app with the given id, or None."""
        for app in self.apps:
            if app.id == app_id:
                return app
        return None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "info"
    format: str = "text"
    """Either "text" or "json"."""

    file: Path | None = None
    """Rotating log file; logs go to stderr when unset."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.casefold() not in {"debug", "info", "warning", "error"}:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.format.casefold() not in {"text", "json"}:
            raise ValueError(f"Invalid log format: {self.format}")


@dataclass
class ServerConfig:
    """Configuration for the HTTP API server."""

    bind: str = "127.0.0.1"
    port: int = 8321
    shutdown_timeout: float = 10.0


@dataclass
class Settings:
    """Runtime settings for the mediadash process."""

    configs_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
