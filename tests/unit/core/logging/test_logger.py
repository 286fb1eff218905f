"""
Tests for Logger implementations.
"""

import json
import logging

import pytest

from globalpost_client.core.logging import (
    LogFormat,
    LogLevel,
    GlobalPostLogger,
    Logger,
    LoggingConfig,
    MemoryLogger,
    NullLogger,
)


class TestMemoryLogger:
    def test_records_entries(self):
        logger = MemoryLogger()

        logger.debug("one", attempt=1)
        logger.info("two")
        logger.warning("three", status=500)
        logger.error("four")

        assert logger.messages == [
            ("debug", "one", {"attempt": 1}),
            ("info", "two", {}),
            ("warning", "three", {"status": 500}),
            ("error", "four", {}),
        ]
        assert logger.levels() == ["debug", "info", "warning", "error"]

    def test_clear(self):
        logger = MemoryLogger()
        logger.info("x")

        logger.clear()

        assert logger.messages == []

    def test_reserved_names_as_context(self):
        logger = MemoryLogger()

        logger.warning("Retrying", message="upstream text", level="high")
        logger.log("info", "direct", level="x", message="y")

        assert logger.messages == [
            ("warning", "Retrying", {"message": "upstream text", "level": "high"}),
            ("info", "direct", {"level": "x", "message": "y"}),
        ]


class TestNullLogger:
    def test_accepts_everything(self):
        logger = NullLogger()

        logger.debug("a", x=1)
        logger.info("b")
        logger.warning("c")
        logger.error("d", token="secret")

    def test_message_as_context(self):
        logger = NullLogger()

        logger.warning("a", message="b")
        logger.error("c", message="d")


class TestLoggerProtocol:
    def test_implementations_match_protocol(self):
        def use(logger: Logger):
            logger.warning("msg", attempt=1)

        use(MemoryLogger())
        use(NullLogger())
        use(GlobalPostLogger(LoggingConfig(console=False), name="globalpost_client.test_protocol"))


class TestGlobalPostLogger:
    def test_level_from_config(self):
        logger = GlobalPostLogger(
            LoggingConfig(level="WARNING", console=False),
            name="globalpost_client.test_level",
        )

        assert logger._logger.level == logging.WARNING
        assert logger._logger.propagate is False
        assert logger._logger.handlers == []

    def test_reinitialization_replaces_handlers(self):
        config = LoggingConfig(console=True)

        GlobalPostLogger(config, name="globalpost_client.test_reinit")
        logger = GlobalPostLogger(config, name="globalpost_client.test_reinit")

        assert len(logger._logger.handlers) == 1
        logger.close()

    def test_json_file_output_is_masked(self, logging_config_with_file):
        logger = GlobalPostLogger(logging_config_with_file, name="globalpost_client.test_json")

        logger.warning("Retrying", attempt=1, token="secret", message="clash", url="u" * 300)
        logger.close()

        with open(logging_config_with_file.file_path, encoding="utf-8") as f:
            entry = json.loads(f.readline())

        assert entry["level"] == "WARNING"
        assert entry["message"] == "Retrying"
        context = entry["context"]
        assert context["attempt"] == 1
        assert context["token"] == "[filtered]"
        assert context["ctx_message"] == "clash"
        assert context["channel"] == "globalpost"
        assert len(context["url"]) == 160

    def test_message_context_key_renamed(self):
        logger = GlobalPostLogger(LoggingConfig(console=False), name="globalpost_client.test_rename")
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        logger._logger.addHandler(handler)

        logger.warning("GlobalPost response", message="Invalid data", status=400)
        logger.close()

        assert records[0].getMessage() == "GlobalPost response"
        assert records[0].ctx_message == "Invalid data"
        assert records[0].status == 400

    def test_text_console_output(self, capsys):
        logger = GlobalPostLogger(
            LoggingConfig(level="DEBUG", format="text", channel=None),
            name="globalpost_client.test_text",
        )

        logger.debug("GlobalPost request", method="GET", attempt=1)
        logger.close()

        out = capsys.readouterr().out
        assert "DEBUG    globalpost_client.test_text: GlobalPost request | method=GET attempt=1" in out
        assert "channel" not in out

    def test_below_level_dropped(self, capsys):
        logger = GlobalPostLogger(LoggingConfig(level="ERROR"), name="globalpost_client.test_drop")

        logger.warning("ignored")
        logger.close()

        assert capsys.readouterr().out == ""

    def test_close_idempotent(self):
        logger = GlobalPostLogger(LoggingConfig(), name="globalpost_client.test_close")

        logger.close()
        logger.close()

        assert logger._logger.handlers == []

    def test_context_manager(self):
        with GlobalPostLogger(LoggingConfig(), name="globalpost_client.test_ctx") as logger:
            logger.critical("down", status=503)

        assert logger._logger.handlers == []


class TestLoggingConfig:
    def test_defaults(self):
        config = LoggingConfig()

        assert config.level is LogLevel.INFO
        assert config.format is LogFormat.TEXT
        assert config.channel == "globalpost"
        assert config.file_enabled is False

    def test_strings_normalized(self):
        config = LoggingConfig(level="debug", format="JSON")

        assert config.level is LogLevel.DEBUG
        assert config.format is LogFormat.JSON
        assert config.level.numeric == logging.DEBUG

    @pytest.mark.parametrize("kwargs", [
        {"level": "VERBOSE"},
        {"format": "xml"},
        {"max_bytes": 0},
        {"backup_count": -1},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            LoggingConfig(**kwargs)
