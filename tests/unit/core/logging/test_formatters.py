"""
Tests for log formatters and handlers.
"""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from globalpost_client.core.logging.config import LogFormat, LoggingConfig
from globalpost_client.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    get_formatter,
    record_context,
)
from globalpost_client.core.logging.handlers import ChannelFilter, build_handlers


def make_record(message="GlobalPost response", **extra):
    record = logging.LogRecord(
        name="globalpost_client",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    def test_record_context(self):
        record = make_record(status=503, attempt=1)

        assert record_context(record) == {"status": 503, "attempt": 1}

    def test_json(self):
        output = JSONFormatter().format(make_record(status=503))

        data = json.loads(output)
        assert data["level"] == "WARNING"
        assert data["logger"] == "globalpost_client"
        assert data["message"] == "GlobalPost response"
        assert data["context"] == {"status": 503}
        assert data["ts"].endswith("+00:00")

    def test_json_non_ascii_and_objects(self):
        output = JSONFormatter().format(make_record("Київ", payload=object()))

        data = json.loads(output)
        assert data["message"] == "Київ"
        assert isinstance(data["context"]["payload"], str)

    def test_text(self):
        output = TextFormatter().format(make_record(status=503, attempt=2))

        assert output.endswith("WARNING  globalpost_client: GlobalPost response | status=503 attempt=2")

    def test_text_without_context(self):
        output = TextFormatter().format(make_record())

        assert output.endswith("globalpost_client: GlobalPost response")

    def test_colored(self):
        record = make_record(status=503)

        output = ColoredFormatter().format(record)

        assert output.startswith("\033[33m")
        assert "\033[0m | status=503" in output
        assert record.levelname == "WARNING"

    @pytest.mark.parametrize("name,cls", [
        ("json", JSONFormatter),
        ("TEXT", TextFormatter),
        (LogFormat.COLORED, ColoredFormatter),
    ])
    def test_get_formatter(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_get_formatter_unknown(self):
        with pytest.raises(ValueError):
            get_formatter("xml")


class TestChannelFilter:
    def test_adds_channel(self):
        record = make_record()

        assert ChannelFilter("globalpost").filter(record) is True
        assert record.channel == "globalpost"

    def test_record_channel_wins(self):
        record = make_record(channel="custom")

        ChannelFilter("globalpost").filter(record)

        assert record.channel == "custom"


class TestBuildHandlers:
    def test_console_only(self):
        handlers = build_handlers(LoggingConfig(level="DEBUG"))

        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].level == logging.DEBUG
        assert isinstance(handlers[0].formatter, TextFormatter)
        assert any(isinstance(f, ChannelFilter) for f in handlers[0].filters)

    def test_file_handler_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "globalpost.log"

        handlers = build_handlers(LoggingConfig(console=False, format="json", file_path=str(path), max_bytes=1024, backup_count=2))

        assert len(handlers) == 1
        handler = handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
        assert isinstance(handler.formatter, JSONFormatter)
        assert path.parent.is_dir()
        handler.close()

    def test_no_channel_filter(self):
        handlers = build_handlers(LoggingConfig(channel=None))

        assert handlers[0].filters == []

    def test_nothing_enabled(self):
        assert build_handlers(LoggingConfig(console=False)) == []
