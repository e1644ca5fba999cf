"""Unit tests for Tdarr response remapping."""

import pytest

from mediadash.integrations.tdarr.mapping import (
    BYTES_PER_MEGABYTE,
    mb_to_bytes,
    queue_entry_from_row,
    statistics_from_model,
    workers_from_nodes,
)
from mediadash.integrations.tdarr.models import QueueEntryType
from mediadash.integrations.tdarr.schemas import (
    NODES_ADAPTER,
    StatisticsModel,
    StatusTablePageModel,
)


@pytest.mark.parametrize("megabytes", [0, 1, 1536.25, 2500, 0.000001])
def test_mb_to_bytes_is_decimal(megabytes):
    assert BYTES_PER_MEGABYTE == 1_000_000
    assert mb_to_bytes(megabytes) == megabytes * 1_000_000


class TestStatisticsFromModel:
    def test_renames_table_counters(self, statistics_payload):
        stats = statistics_from_model(StatisticsModel.model_validate(statistics_payload))

        assert stats.total_file_count == 1200
        assert stats.total_transcode_count == 340
        assert stats.total_health_check_count == 980
        assert stats.failed_transcode_count == 2  # table3
        assert stats.failed_health_check_count == 1  # table6
        assert stats.staged_transcode_count == 12  # table1
        assert stats.staged_health_check_count == 40  # table4

    def test_unpacks_pies(self, statistics_payload):
        stats = statistics_from_model(StatisticsModel.model_validate(statistics_payload))
        movies, tv = stats.pies

        assert movies.library_name == "Movies"
        assert movies.library_id == "lib-movies"
        assert movies.total_files == 800
        assert movies.total_transcodes == 200
        assert movies.total_health_checks == 700
        assert movies.saved_space == 1536.25 * 1_000_000
        assert [(s.name, s.value) for s in movies.transcode_status] == [
            ("Transcode success", 190),
            ("Not required", 600),
        ]
        assert [s.name for s in movies.health_check_status] == ["Success", "Error"]
        assert [s.name for s in movies.video_containers] == ["mkv", "mp4"]
        assert [s.name for s in movies.video_resolutions] == ["1080p", "4KUHD"]
        assert [s.name for s in movies.audio_codecs] == ["aac"]
        assert [s.name for s in movies.audio_containers] == ["m4a"]

        assert tv.saved_space == 0
        assert tv.video_codecs == ()

    def test_to_dict_uses_dashboard_keys(self, statistics_payload):
        stats = statistics_from_model(StatisticsModel.model_validate(statistics_payload))
        data = stats.to_dict()

        assert data["failedTranscodeCount"] == 2
        assert data["stagedHealthCheckCount"] == 40
        pie = data["pies"][0]
        assert pie["libraryName"] == "Movies"
        assert pie["savedSpace"] == 1_536_250_000
        assert pie["videoCodecs"] == [
            {"name": "hevc", "value": 500},
            {"name": "h264", "value": 300},
        ]


class TestWorkersFromNodes:
    def test_flattens_all_nodes(self, nodes_payload):
        workers = workers_from_nodes(NODES_ADAPTER.validate_python(nodes_payload))

        assert sorted(w.id for w in workers) == ["brave-bear", "calm-crow", "quiet-quail"]

    def test_remaps_worker_fields(self, nodes_payload):
        workers = workers_from_nodes(NODES_ADAPTER.validate_python(nodes_payload))
        worker = next(w for w in workers if w.id == "brave-bear")

        assert worker.file == "/media/brave-bear.mkv"
        assert worker.fps == 48.5
        assert worker.percentage == 37.2
        assert worker.eta == "0:12:04"
        assert worker.job_type == "transcode"
        assert worker.status == "Processing"
        assert worker.step == "3"
        assert worker.original_size == 2500 * 1_000_000
        assert worker.estimated_size == 1100.5 * 1_000_000
        assert worker.output_size == 400 * 1_000_000

    def test_step_empty_without_plugin_details(self, nodes_payload):
        workers = workers_from_nodes(NODES_ADAPTER.validate_python(nodes_payload))
        worker = next(w for w in workers if w.id == "quiet-quail")

        assert worker.step == ""

    def test_node_fields_not_propagated(self, nodes_payload):
        workers = workers_from_nodes(NODES_ADAPTER.validate_python(nodes_payload))
        data = workers[0].to_dict()

        assert set(data) == {
            "id",
            "file",
            "fps",
            "percentage",
            "ETA",
            "jobType",
            "status",
            "step",
            "originalSize",
            "estimatedSize",
            "outputSize",
        }

    def test_nodes_without_workers(self):
        nodes = NODES_ADAPTER.validate_python(
            {"n": {"_id": "n", "nodeName": "Idle", "nodePaused": True, "workers": {}}}
        )
        assert workers_from_nodes(nodes) == []


class TestQueueEntryFromRow:
    @pytest.mark.parametrize(
        "entry_type", [QueueEntryType.TRANSCODE, QueueEntryType.HEALTH_CHECK]
    )
    def test_remaps_row(self, make_status_table, entry_type):
        page = StatusTablePageModel.model_validate(make_status_table(1, 1))
        entry = queue_entry_from_row(page.array[0], entry_type)

        assert entry.id == "/media/row-0.mkv"
        assert entry.health_check == "Queued"
        assert entry.transcode == "Queued"
        assert entry.file == "/media/row-0.mkv"
        assert entry.file_size == 1_500_000_000
        assert entry.container == "mkv"
        assert entry.codec == "h264"
        assert entry.resolution == "1080p"
        assert entry.type is entry_type

    def test_to_dict_type_values(self, make_status_table):
        row = StatusTablePageModel.model_validate(make_status_table(1, 1)).array[0]

        assert queue_entry_from_row(row, QueueEntryType.TRANSCODE).to_dict()[
            "type"
        ] == "transcode"
        assert queue_entry_from_row(row, QueueEntryType.HEALTH_CHECK).to_dict()[
            "type"
        ] == "health check"
