"""Pydantic models for Tdarr API responses.

Field aliases carry Tdarr's wire names. Unknown upstream fields are ignored;
missing or mistyped fields fail validation. Numbers are strict so that
numeric strings and booleans are rejected rather than coerced.

Note on units: Tdarr reports every size in megabytes, including the worker
fields whose names say "Gbytes".
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    model_validator,
)

Number = Union[StrictInt, StrictFloat]


class _UpstreamModel(BaseModel):
    """Base for upstream response models."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Statistics document (cruddb StatisticsJSONDB/statistics) ---


class PieSegmentModel(_UpstreamModel):
    """One slice of a library breakdown."""

    name: StrictStr
    value: Number


# Column order of a library pie in the statistics document. This is Tdarr's
# positional contract; the tuple must not be reordered.
PIE_COLUMNS: tuple[str, ...] = (
    "library_name",
    "library_id",
    "total_files",
    "total_transcodes",
    "saved_space_mb",
    "total_health_checks",
    "transcode_status",
    "health_check_status",
    "video_codecs",
    "video_containers",
    "video_resolutions",
    "audio_codecs",
    "audio_containers",
)


class LibraryPieModel(_UpstreamModel):
    """Per-library statistics, parsed from a positional 13-element array."""

    library_name: StrictStr
    library_id: StrictStr
    total_files: Number
    total_transcodes: Number
    saved_space_mb: Number
    total_health_checks: Number
    transcode_status: list[PieSegmentModel]
    health_check_status: list[PieSegmentModel]
    video_codecs: list[PieSegmentModel]
    video_containers: list[PieSegmentModel]
    video_resolutions: list[PieSegmentModel]
    audio_codecs: list[PieSegmentModel]
    audio_containers: list[PieSegmentModel]

    @model_validator(mode="before")
    @classmethod
    def from_columns(cls, data: Any) -> Any:
        """Map the positional array onto named fields using PIE_COLUMNS."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, (list, tuple)):
            raise ValueError("library pie must be an array")
        if len(data) != len(PIE_COLUMNS):
            raise ValueError(
                f"library pie must have {len(PIE_COLUMNS)} columns, got {len(data)}"
            )
        return dict(zip(PIE_COLUMNS, data))


class StatisticsModel(_UpstreamModel):
    """The stored statistics document."""

    total_file_count: Number = Field(alias="totalFileCount")
    total_transcode_count: Number = Field(alias="totalTranscodeCount")
    total_health_check_count: Number = Field(alias="totalHealthCheckCount")
    table3_count: Number = Field(alias="table3Count")
    table6_count: Number = Field(alias="table6Count")
    table1_count: Number = Field(alias="table1Count")
    table4_count: Number = Field(alias="table4Count")
    pies: list[LibraryPieModel]


# --- Nodes (get-nodes) ---


class JobModel(_UpstreamModel):
    type: StrictStr


class PluginDetailsModel(_UpstreamModel):
    number: StrictStr


class WorkerModel(_UpstreamModel):
    """A worker slot currently running a job on a node."""

    id: StrictStr = Field(alias="_id")
    file: StrictStr
    fps: Number
    percentage: Number
    eta: StrictStr = Field(alias="ETA")
    job: JobModel
    status: StrictStr
    # Absent when no plugin has run yet; an explicit null is rejected.
    last_plugin_details: PluginDetailsModel = Field(
        default=None, alias="lastPluginDetails"
    )
    original_file_size_mb: Number = Field(alias="originalfileSizeInGbytes")
    estimated_size_mb: Number = Field(alias="estSize")
    output_file_size_mb: Number = Field(alias="outputFileSizeInGbytes")


class NodeModel(_UpstreamModel):
    """A processing node and its workers, keyed by worker id."""

    id: StrictStr = Field(alias="_id")
    node_name: StrictStr = Field(alias="nodeName")
    node_paused: bool = Field(alias="nodePaused", strict=True)
    workers: dict[str, WorkerModel]


NODES_ADAPTER: TypeAdapter[dict[str, NodeModel]] = TypeAdapter(dict[str, NodeModel])


# --- Status tables (client/status-tables) ---


class StatusTableRowModel(_UpstreamModel):
    """A file row in a status table."""

    id: StrictStr = Field(alias="_id")
    health_check: StrictStr = Field(alias="HealthCheck")
    transcode_decision: StrictStr = Field(alias="TranscodeDecisionMaker")
    file: StrictStr
    file_size_mb: Number = Field(alias="file_size")
    container: StrictStr
    video_codec_name: StrictStr
    video_resolution: StrictStr


class StatusTablePageModel(_UpstreamModel):
    """One page of a status table."""

    array: list[StatusTableRowModel]
    total_count: Number = Field(alias="totalCount")
