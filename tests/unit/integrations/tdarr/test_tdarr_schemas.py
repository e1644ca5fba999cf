"""Unit tests for Tdarr response models."""

import copy

import pytest
from pydantic import ValidationError

from mediadash.integrations.tdarr.schemas import (
    NODES_ADAPTER,
    PIE_COLUMNS,
    StatisticsModel,
    StatusTablePageModel,
)


class TestStatisticsModel:
    """Tests for the statistics document schema."""

    def test_parses_document(self, statistics_payload):
        data = StatisticsModel.model_validate(statistics_payload)

        assert data.total_file_count == 1200
        assert data.table3_count == 2
        assert len(data.pies) == 2

        movies = data.pies[0]
        assert movies.library_name == "Movies"
        assert movies.library_id == "lib-movies"
        assert movies.total_files == 800
        assert movies.total_transcodes == 200
        assert movies.saved_space_mb == 1536.25
        assert movies.total_health_checks == 700
        assert [s.name for s in movies.video_codecs] == ["hevc", "h264"]
        assert movies.audio_containers[0].value == 10

    def test_pie_columns_follow_upstream_order(self):
        assert len(PIE_COLUMNS) == 13
        assert PIE_COLUMNS[:6] == (
            "library_name",
            "library_id",
            "total_files",
            "total_transcodes",
            "saved_space_mb",
            "total_health_checks",
        )
        assert PIE_COLUMNS[6:] == (
            "transcode_status",
            "health_check_status",
            "video_codecs",
            "video_containers",
            "video_resolutions",
            "audio_codecs",
            "audio_containers",
        )

    def test_missing_summary_field(self, statistics_payload):
        del statistics_payload["table6Count"]
        with pytest.raises(ValidationError):
            StatisticsModel.model_validate(statistics_payload)

    def test_numeric_string_rejected(self, statistics_payload):
        statistics_payload["totalFileCount"] = "1200"
        with pytest.raises(ValidationError):
            StatisticsModel.model_validate(statistics_payload)

    def test_short_pie_rejected(self, statistics_payload):
        statistics_payload["pies"][0] = statistics_payload["pies"][0][:12]
        with pytest.raises(ValidationError, match="13 columns"):
            StatisticsModel.model_validate(statistics_payload)

    def test_pie_as_object_rejected(self, statistics_payload):
        statistics_payload["pies"][0] = dict(
            zip(PIE_COLUMNS, statistics_payload["pies"][0])
        )
        with pytest.raises(ValidationError, match="must be an array"):
            StatisticsModel.model_validate(statistics_payload)

    def test_swapped_columns_rejected(self, statistics_payload):
        pie = statistics_payload["pies"][0]
        pie[0], pie[2] = pie[2], pie[0]
        with pytest.raises(ValidationError):
            StatisticsModel.model_validate(statistics_payload)

    def test_bad_segment_rejected(self, statistics_payload):
        statistics_payload["pies"][1][8] = [{"name": "hevc"}]
        with pytest.raises(ValidationError):
            StatisticsModel.model_validate(statistics_payload)


class TestNodesAdapter:
    """Tests for the get-nodes schema."""

    def test_parses_nodes(self, nodes_payload):
        nodes = NODES_ADAPTER.validate_python(nodes_payload)

        assert set(nodes) == {"node-a", "node-b"}
        node = nodes["node-a"]
        assert node.node_name == "Server"
        assert node.node_paused is False

        worker = node.workers["brave-bear"]
        assert worker.id == "brave-bear"
        assert worker.eta == "0:12:04"
        assert worker.job.type == "transcode"
        assert worker.last_plugin_details is not None
        assert worker.last_plugin_details.number == "3"
        assert worker.original_file_size_mb == 2500

    def test_plugin_details_optional(self, nodes_payload):
        nodes = NODES_ADAPTER.validate_python(nodes_payload)
        assert nodes["node-a"].workers["quiet-quail"].last_plugin_details is None

    def test_plugin_details_null_rejected(self, nodes_payload):
        nodes_payload["node-a"]["workers"]["brave-bear"]["lastPluginDetails"] = None
        with pytest.raises(ValidationError):
            NODES_ADAPTER.validate_python(nodes_payload)

    def test_empty_listing(self):
        assert NODES_ADAPTER.validate_python({}) == {}

    def test_node_paused_must_be_bool(self, nodes_payload):
        nodes_payload["node-a"]["nodePaused"] = "false"
        with pytest.raises(ValidationError):
            NODES_ADAPTER.validate_python(nodes_payload)

    def test_worker_missing_job(self, nodes_payload):
        broken = copy.deepcopy(nodes_payload)
        del broken["node-b"]["workers"]["calm-crow"]["job"]
        with pytest.raises(ValidationError):
            NODES_ADAPTER.validate_python(broken)

    def test_workers_must_be_mapping(self, nodes_payload):
        nodes_payload["node-b"]["workers"] = []
        with pytest.raises(ValidationError):
            NODES_ADAPTER.validate_python(nodes_payload)


class TestStatusTablePageModel:
    def test_parses_page(self, make_status_table):
        page = StatusTablePageModel.model_validate(make_status_table(2, 10))

        assert page.total_count == 10
        assert len(page.array) == 2
        row = page.array[0]
        assert row.id == "/media/row-0.mkv"
        assert row.health_check == "Queued"
        assert row.transcode_decision == "Queued"
        assert row.file_size_mb == 1500
        assert row.video_codec_name == "h264"

    def test_missing_total_count(self, make_status_table):
        payload = make_status_table(1, 1)
        del payload["totalCount"]
        with pytest.raises(ValidationError):
            StatusTablePageModel.model_validate(payload)

    def test_row_missing_field(self, make_status_table):
        payload = make_status_table(3, 3)
        del payload["array"][2]["video_resolution"]
        with pytest.raises(ValidationError):
            StatusTablePageModel.model_validate(payload)
