"""Shared test fixtures for mediadash."""

import logging
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from mediadash.logging.context import IntegrationContextFilter

DEFAULT_CONFIG_YAML = """\
apps:
  - id: tdarr-1
    name: Tdarr
    url: http://tdarr.local:8265
    integration:
      type: tdarr
      timeout_seconds: 15
  - id: radarr-1
    name: Radarr
    url: http://radarr.local:7878
    integration:
      type: radarr
  - id: plain-1
    name: Bookmark
    url: https://example.org
"""


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers installed by configure_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if any(isinstance(f, IntegrationContextFilter) for f in handler.filters):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def configs_dir(temp_dir: Path) -> Path:
    """Create a configs directory holding a 'default' configuration set."""
    directory = temp_dir / "configs"
    directory.mkdir()
    (directory / "default.yaml").write_text(DEFAULT_CONFIG_YAML)
    return directory


def _segments(*pairs: tuple[str, int]) -> list[dict[str, Any]]:
    return [{"name": name, "value": value} for name, value in pairs]


@pytest.fixture
def statistics_payload() -> dict[str, Any]:
    """A statistics document as returned by the cruddb endpoint."""
    return {
        "_id": "statistics",
        "totalFileCount": 1200,
        "totalTranscodeCount": 340,
        "totalHealthCheckCount": 980,
        "table1Count": 12,
        "table3Count": 2,
        "table4Count": 40,
        "table6Count": 1,
        "sizeDiff": 512.5,
        "pies": [
            [
                "Movies",
                "lib-movies",
                800,
                200,
                1536.25,
                700,
                _segments(("Transcode success", 190), ("Not required", 600)),
                _segments(("Success", 690), ("Error", 10)),
                _segments(("hevc", 500), ("h264", 300)),
                _segments(("mkv", 780), ("mp4", 20)),
                _segments(("1080p", 600), ("4KUHD", 200)),
                _segments(("aac", 10)),
                _segments(("m4a", 10)),
            ],
            [
                "TV",
                "lib-tv",
                400,
                140,
                0,
                280,
                [],
                [],
                [],
                [],
                [],
                [],
                [],
            ],
        ],
    }


def _worker(worker_id: str, **overrides: Any) -> dict[str, Any]:
    worker = {
        "_id": worker_id,
        "file": f"/media/{worker_id}.mkv",
        "fps": 48.5,
        "percentage": 37.2,
        "ETA": "0:12:04",
        "job": {"type": "transcode", "jobId": "abc"},
        "status": "Processing",
        "lastPluginDetails": {"source": "Community", "number": "3"},
        "originalfileSizeInGbytes": 2500,
        "estSize": 1100.5,
        "outputFileSizeInGbytes": 400,
        "workerType": "transcodegpu",
    }
    worker.update(overrides)
    return worker


@pytest.fixture
def nodes_payload() -> dict[str, Any]:
    """A get-nodes response with two nodes and three workers."""
    no_step = _worker("quiet-quail")
    del no_step["lastPluginDetails"]
    return {
        "node-a": {
            "_id": "node-a",
            "nodeName": "Server",
            "nodePaused": False,
            "workers": {
                "brave-bear": _worker("brave-bear"),
                "quiet-quail": no_step,
            },
        },
        "node-b": {
            "_id": "node-b",
            "nodeName": "Desktop",
            "nodePaused": True,
            "workers": {
                "calm-crow": _worker(
                    "calm-crow", job={"type": "healthcheck"}, percentage=90
                ),
            },
        },
    }


@pytest.fixture
def make_status_table() -> Callable[..., dict[str, Any]]:
    """Factory building status-table responses with generated rows."""

    def factory(
        count: int, total: int, prefix: str = "row", start: int = 0
    ) -> dict[str, Any]:
        rows = [
            {
                "_id": f"/media/{prefix}-{start + i}.mkv",
                "HealthCheck": "Queued",
                "TranscodeDecisionMaker": "Queued",
                "file": f"/media/{prefix}-{start + i}.mkv",
                "file_size": 1500 + i,
                "container": "mkv",
                "video_codec_name": "h264",
                "video_resolution": "1080p",
                "DB": "lib-movies",
            }
            for i in range(count)
        ]
        return {"array": rows, "totalCount": total}

    return factory
