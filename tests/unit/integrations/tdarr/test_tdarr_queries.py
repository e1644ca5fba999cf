"""Unit tests for Tdarr operation inputs."""

import pytest
from pydantic import ValidationError

from mediadash.integrations.tdarr.queries import AppQuery, QueueQuery


class TestAppQuery:
    def test_accepts_wire_names(self):
        query = AppQuery.model_validate({"appId": "a", "configName": "default"})
        assert (query.app_id, query.config_name) == ("a", "default")

    def test_accepts_field_names(self):
        query = AppQuery(app_id="a", config_name="default")
        assert query.app_id == "a"

    def test_requires_both_fields(self):
        with pytest.raises(ValidationError):
            AppQuery.model_validate({"appId": "a"})

    def test_ignores_unknown_fields(self):
        query = AppQuery.model_validate({"appId": "a", "configName": "c", "_": "17"})
        assert query.model_dump() == {"app_id": "a", "config_name": "c"}


class TestQueueQuery:
    def test_parses_query_string_values(self):
        query = QueueQuery.model_validate(
            {
                "appId": "a",
                "configName": "default",
                "showHealthChecksInQueue": "true",
                "pageSize": "20",
                "page": "3",
            }
        )

        assert query.show_health_checks_in_queue is True
        assert query.page_size == 20
        assert query.page == 3

    @pytest.mark.parametrize(
        ("field", "value"), [("pageSize", 0), ("page", -1), ("pageSize", "ten")]
    )
    def test_rejects_invalid_paging(self, field, value):
        data = {
            "appId": "a",
            "configName": "default",
            "showHealthChecksInQueue": False,
            "pageSize": 10,
            "page": 0,
        }
        data[field] = value
        with pytest.raises(ValidationError):
            QueueQuery.model_validate(data)
