"""Input models for the Tdarr operations.

Wire names (appId, configName, ...) are accepted as aliases so the same
models validate HTTP query strings and keyword construction. Unknown
parameters, such as cache-busting timestamps, are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class AppQuery(BaseModel):
    """Identifies the Tdarr app to query."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    app_id: str = Field(alias="appId", min_length=1)
    config_name: str = Field(alias="configName", min_length=1)


class QueueQuery(AppQuery):
    """Identifies the app and the queue page to fetch."""

    show_health_checks_in_queue: bool = Field(alias="showHealthChecksInQueue")
    page_size: int = Field(alias="pageSize", ge=1)
    page: int = Field(ge=0)
