"""
Tests for logging setup and flat config serialization.
"""

import logging
import sys
import types

import pytest
from rich.logging import RichHandler

from flatcompat.utils.logging import (
    ROOT_LOGGER_NAME,
    FileFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)
from flatcompat.utils.serialize import describe_object, serialize_flat_config, to_plain_data


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestLogging:
    """Logging setup."""

    def test_get_logger_prefixes_namespace(self):
        assert get_logger("translator").name == "flatcompat.translator"
        assert get_logger("flatcompat.resolver").name == "flatcompat.resolver"
        assert get_logger().name == "flatcompat"

    def test_rich_handler(self):
        logger = setup_logging(level="debug")
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_plain_handler(self):
        logger = setup_logging(level="WARNING", use_rich=False)
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], RichHandler)

    def test_unknown_level_defaults_to_info(self):
        assert setup_logging(level="chatty", console_enabled=False).level == logging.INFO

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "flatcompat.log"
        setup_logging(level="DEBUG", log_file=log_file, console_enabled=False)
        get_logger("translator").debug("Translating environment: es6")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        content = log_file.read_text()
        assert "[DEBUG   ] flatcompat.translator: Translating environment: es6" in content

    def test_from_config_relative_file(self, tmp_path):
        logger = setup_logging_from_config(
            {"logging": {"level": "ERROR", "file": "out.log", "console_enabled": False}}, project_dir=tmp_path
        )
        assert logger.level == logging.ERROR
        assert logger.handlers[0].baseFilename == str(tmp_path / "out.log")

    def test_file_formatter_includes_traceback(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord("flatcompat", logging.ERROR, __file__, 1, "failed", None, None)
            record.exc_info = sys.exc_info()
        text = FileFormatter().format(record)
        assert "failed" in text
        assert "ValueError: bad" in text


class TestSerialize:
    """Rendering flat config items as plain data."""

    def test_sentinel_kept(self):
        assert serialize_flat_config(["eslint:all"]) == ["eslint:all"]

    def test_plugins_and_parser(self):
        parser = types.ModuleType("my_parser")
        items = [{"plugins": {"react": {"rules": {}}}, "languageOptions": {"parser": parser, "sourceType": "module"}}]
        assert serialize_flat_config(items) == [
            {"plugins": {"react": "<plugin react>"}, "languageOptions": {"sourceType": "module", "parser": "<module my_parser>"}}
        ]

    def test_processor(self):
        class Processor:
            meta = {"name": "markdown"}

        assert serialize_flat_config([{"files": ["**/*.md"], "processor": Processor()}]) == [
            {"files": ["**/*.md"], "processor": "<markdown>"}
        ]
        assert serialize_flat_config([{"processor": "fixture2/markdown"}]) == [{"processor": "fixture2/markdown"}]

    def test_nested_files(self):
        assert serialize_flat_config([{"files": [["!*.md"]]}]) == [{"files": [["!*.md"]]}]

    def test_describe_object(self):
        assert describe_object(object()) == "<object>"
        assert describe_object(len) == "<len>"

    def test_to_plain_data(self):
        assert to_plain_data({1: (True, None)}) == {"1": [True, None]}
