"""Remapping of validated Tdarr responses to dashboard output models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from mediadash.integrations.tdarr.models import (
    LibraryPie,
    Number,
    PieSegment,
    QueueEntry,
    QueueEntryType,
    TdarrStatistics,
    TdarrWorker,
)
from mediadash.integrations.tdarr.schemas import (
    LibraryPieModel,
    NodeModel,
    PieSegmentModel,
    StatisticsModel,
    StatusTableRowModel,
    WorkerModel,
)

# Tdarr sizes are decimal megabytes
BYTES_PER_MEGABYTE = 1_000_000


def mb_to_bytes(value: Number) -> Number:
    """Convert Tdarr's decimal megabytes to bytes."""
    return value * BYTES_PER_MEGABYTE


def _segments(segments: Iterable[PieSegmentModel]) -> tuple[PieSegment, ...]:
    return tuple(PieSegment(name=s.name, value=s.value) for s in segments)


def library_pie_from_model(pie: LibraryPieModel) -> LibraryPie:
    """Unpack one positional library pie into a named record."""
    return LibraryPie(
        library_name=pie.library_name,
        library_id=pie.library_id,
        total_files=pie.total_files,
        total_transcodes=pie.total_transcodes,
        saved_space=mb_to_bytes(pie.saved_space_mb),
        total_health_checks=pie.total_health_checks,
        transcode_status=_segments(pie.transcode_status),
        health_check_status=_segments(pie.health_check_status),
        video_codecs=_segments(pie.video_codecs),
        video_containers=_segments(pie.video_containers),
        video_resolutions=_segments(pie.video_resolutions),
        audio_codecs=_segments(pie.audio_codecs),
        audio_containers=_segments(pie.audio_containers),
    )


def statistics_from_model(data: StatisticsModel) -> TdarrStatistics:
    """Rename Tdarr's table counters and unpack the library pies.

    Tdarr's status tables are numbered: table1 is the transcode queue,
    table3 failed transcodes, table4 the health-check queue and table6
    failed health checks.
    """
    return TdarrStatistics(
        total_file_count=data.total_file_count,
        total_transcode_count=data.total_transcode_count,
        total_health_check_count=data.total_health_check_count,
        failed_transcode_count=data.table3_count,
        failed_health_check_count=data.table6_count,
        staged_transcode_count=data.table1_count,
        staged_health_check_count=data.table4_count,
        pies=tuple(library_pie_from_model(pie) for pie in data.pies),
    )


def worker_from_model(worker: WorkerModel) -> TdarrWorker:
    step = worker.last_plugin_details.number if worker.last_plugin_details else ""
    return TdarrWorker(
        id=worker.id,
        file=worker.file,
        fps=worker.fps,
        percentage=worker.percentage,
        eta=worker.eta,
        job_type=worker.job.type,
        status=worker.status,
        step=step,
        original_size=mb_to_bytes(worker.original_file_size_mb),
        estimated_size=mb_to_bytes(worker.estimated_size_mb),
        output_size=mb_to_bytes(worker.output_file_size_mb),
    )


def workers_from_nodes(nodes: Mapping[str, NodeModel]) -> list[TdarrWorker]:
    """Flatten the node -> worker mapping into one list of workers.

    Node fields (name, paused flag) are not carried over. No ordering is
    guaranteed beyond the order Tdarr happened to send.
    """
    return [
        worker_from_model(worker)
        for node in nodes.values()
        for worker in node.workers.values()
    ]


def queue_entry_from_row(
    row: StatusTableRowModel, entry_type: QueueEntryType
) -> QueueEntry:
    return QueueEntry(
        id=row.id,
        health_check=row.health_check,
        transcode=row.transcode_decision,
        file=row.file,
        file_size=mb_to_bytes(row.file_size_mb),
        container=row.container,
        codec=row.video_codec_name,
        resolution=row.video_resolution,
        type=entry_type,
    )
