import logging
from pathlib import Path

import pytest
from src.core.common.logging_utils import (
    EnvironmentTaggingFilter,
    EnvironmentTaggingFormatter,
    LogContext,
    configure_logging,
    get_logger,
    is_sensitive_key,
    redact,
    redact_setting_value,
)


class TestRedaction:
    def test_redact_long_value_keeps_edges(self) -> None:
        assert redact("supersecret") == "su***et"

    def test_redact_short_value(self) -> None:
        assert redact("abc") == "***"
        assert redact("") == ""

    @pytest.mark.parametrize(
        "key",
        ["password", "DB_PASSWORD", "api-key", "github.token", "client_secret"],
    )
    def test_sensitive_keys(self, key: str) -> None:
        assert is_sensitive_key(key)

    @pytest.mark.parametrize("key", ["greeting", "color", "timeout"])
    def test_ordinary_keys(self, key: str) -> None:
        assert not is_sensitive_key(key)

    def test_redact_setting_value(self) -> None:
        assert redact_setting_value("greeting", "hello world") == "hello world"
        assert redact_setting_value("api_key", "sk-1234567890") == "sk***90"


class TestEnvironmentTaggingFormatter:
    def test_tags_records_without_filter(self) -> None:
        formatter = EnvironmentTaggingFormatter(fmt="[%(env_tag)s] %(message)s")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hi", None, None)

        assert formatter.format(record) == "[test] hi"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        yield
        configure_logging("WARNING")

    def test_writes_to_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "console.log"

        configure_logging("info", str(log_file), "%(env_tag)s|%(message)s")
        logging.getLogger("settings.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "test|written" in log_file.read_text(encoding="utf-8")

    def test_repeated_configuration_keeps_one_tagging_filter(self) -> None:
        configure_logging("INFO")
        configure_logging("DEBUG")

        def _tagging(filters: list) -> int:
            return sum(isinstance(f, EnvironmentTaggingFilter) for f in filters)

        root = logging.getLogger()
        assert _tagging(root.filters) == 1
        assert root.handlers
        assert all(_tagging(h.filters) == 1 for h in root.handlers)

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("chatty")

        assert logging.getLogger().level == logging.INFO

    def test_structlog_goes_through_stdlib(self, tmp_path: Path) -> None:
        log_file = tmp_path / "events.log"
        configure_logging("DEBUG", str(log_file), "%(message)s")

        with LogContext(get_logger("settings.events"), command="get") as log:
            log.info("dispatched", tokens=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "event='dispatched'" in text
        assert "command='get'" in text
        assert "tokens=3" in text
