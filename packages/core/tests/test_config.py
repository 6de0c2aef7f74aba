"""配置与日志初始化测试"""

import json

import pytest
import structlog
from tradeplan.core.config import get_db_path, get_log_format
from tradeplan.core.logging_config import setup_logging


class TestConfig:
    def test_db_path_follows_data_dir(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("TRADEPLAN_DB_PATH", raising=False)
        monkeypatch.setenv("TRADEPLAN_DATA_DIR", "/srv/plans")
        assert get_db_path() == "/srv/plans/sqlite/tradeplan.db"

    def test_db_path_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TRADEPLAN_DB_PATH", "/tmp/x.db")
        assert get_db_path() == "/tmp/x.db"

    def test_log_format_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("TRADEPLAN_LOG_FORMAT", raising=False)
        assert get_log_format() == "dev"


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_lines_on_stderr(self, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv("TRADEPLAN_LOG_FORMAT", "json")
        monkeypatch.setenv("TRADEPLAN_LOG_LEVEL", "info")
        setup_logging()

        structlog.get_logger().info("checklist_generated", activity_id="act-1")

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip())
        assert record["event"] == "checklist_generated"
        assert record["activity_id"] == "act-1"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_below_threshold(self, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv("TRADEPLAN_LOG_FORMAT", "json")
        monkeypatch.setenv("TRADEPLAN_LOG_LEVEL", "warning")
        setup_logging()

        log = structlog.get_logger()
        log.debug("reminders_refreshed")
        log.info("activity_created")
        log.warning("checklist_recalculation_skipped", reason="template_not_found")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == [
            "checklist_recalculation_skipped"
        ]

    def test_unknown_level_falls_back_to_info(self, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv("TRADEPLAN_LOG_FORMAT", "dev")
        monkeypatch.setenv("TRADEPLAN_LOG_LEVEL", "chatty")
        setup_logging()

        log = structlog.get_logger()
        log.debug("hidden_event")
        log.info("visible_event")

        err = capsys.readouterr().err
        assert "visible_event" in err
        assert "hidden_event" not in err
