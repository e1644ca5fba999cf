"""Output models for the Tdarr integration.

These are the shapes handed to the dashboard. Sizes are in bytes.
to_dict() renders the camelCase JSON the dashboard widgets read.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

Number = int | float


@dataclass(frozen=True)
class PieSegment:
    """One slice of a library breakdown."""

    name: str
    value: Number

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class LibraryPie:
    """Statistics for a single Tdarr library."""

    library_name: str
    library_id: str
    total_files: Number
    total_transcodes: Number
    saved_space: Number  # bytes
    total_health_checks: Number
    transcode_status: tuple[PieSegment, ...]
    health_check_status: tuple[PieSegment, ...]
    video_codecs: tuple[PieSegment, ...]
    video_containers: tuple[PieSegment, ...]
    video_resolutions: tuple[PieSegment, ...]
    audio_codecs: tuple[PieSegment, ...]
    audio_containers: tuple[PieSegment, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "libraryName": self.library_name,
            "libraryId": self.library_id,
            "totalFiles": self.total_files,
            "totalTranscodes": self.total_transcodes,
            "savedSpace": self.saved_space,
            "totalHealthChecks": self.total_health_checks,
            "transcodeStatus": [s.to_dict() for s in self.transcode_status],
            "healthCheckStatus": [s.to_dict() for s in self.health_check_status],
            "videoCodecs": [s.to_dict() for s in self.video_codecs],
            "videoContainers": [s.to_dict() for s in self.video_containers],
            "videoResolutions": [s.to_dict() for s in self.video_resolutions],
            "audioCodecs": [s.to_dict() for s in self.audio_codecs],
            "audioContainers": [s.to_dict() for s in self.audio_containers],
        }


@dataclass(frozen=True)
class TdarrStatistics:
    """Aggregate Tdarr statistics across all libraries."""

    total_file_count: Number
    total_transcode_count: Number
    total_health_check_count: Number
    failed_transcode_count: Number
    failed_health_check_count: Number
    staged_transcode_count: Number
    staged_health_check_count: Number
    pies: tuple[LibraryPie, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFileCount": self.total_file_count,
            "totalTranscodeCount": self.total_transcode_count,
            "totalHealthCheckCount": self.total_health_check_count,
            "failedTranscodeCount": self.failed_transcode_count,
            "failedHealthCheckCount": self.failed_health_check_count,
            "stagedTranscodeCount": self.staged_transcode_count,
            "stagedHealthCheckCount": self.staged_health_check_count,
            "pies": [p.to_dict() for p in self.pies],
        }


@dataclass(frozen=True)
class TdarrWorker:
    """A job slot currently running on a Tdarr node."""

    id: str
    file: str
    fps: Number
    percentage: Number
    eta: str  # preformatted by Tdarr, e.g. "0:04:12"
    job_type: str
    status: str
    step: str  # "" when Tdarr reports no plugin step
    original_size: Number
    estimated_size: Number
    output_size: Number

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file": self.file,
            "fps": self.fps,
            "percentage": self.percentage,
            "ETA": self.eta,
            "jobType": self.job_type,
            "status": self.status,
            "step": self.step,
            "originalSize": self.original_size,
            "estimatedSize": self.estimated_size,
            "outputSize": self.output_size,
        }


class QueueEntryType(Enum):
    """Which Tdarr queue an entry came from."""

    TRANSCODE = "transcode"
    HEALTH_CHECK = "health check"


@dataclass(frozen=True)
class QueueEntry:
    """A file waiting for a transcode or a health check."""

    id: str
    health_check: str
    transcode: str
    file: str
    file_size: Number  # bytes
    container: str
    codec: str
    resolution: str
    type: QueueEntryType

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "healthCheck": self.health_check,
            "transcode": self.transcode,
            "file": self.file,
            "fileSize": self.file_size,
            "container": self.container,
            "codec": self.codec,
            "resolution": self.resolution,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class QueuePage:
    """One page of the combined transcode + health-check queue.

    start_index and end_index are zero-based and inclusive, so an empty
    page has end_index == start_index - 1.
    """

    entries: tuple[QueueEntry, ...]
    total_count: Number
    start_index: int
    end_index: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "array": [e.to_dict() for e in self.entries],
            "totalCount": self.total_count,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
        }
