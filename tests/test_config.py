import json
import logging

import pytest

from render_core.utils.config import Config
from render_core.utils.logging import LOGGER_NAME, PerformanceLogger, configure_from


def test_defaults():
    config = Config()

    assert config.get("logging.console_level") == "WARNING"
    assert config.get("logging.file") is None
    assert config.get("html.decode_entities") is True
    assert config.get("html.keep_whitespace_text") is False
    assert config.get("html.missing", "fallback") == "fallback"
    assert config.get("nothing.here.at.all") is None


def test_set_creates_nested_keys():
    config = Config()
    config.set("a.b.c", 3)

    assert config.get("a.b.c") == 3
    assert config.get_all()["a"] == {"b": {"c": 3}}


def test_get_all_is_a_copy():
    config = Config()
    config.get_all()["html"]["decode_entities"] = False

    assert config.get("html.decode_entities") is True


def test_load_merges_file_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"html": {"decode_entities": False}}))

    config = Config(str(path))

    assert config.get("html.decode_entities") is False
    assert config.get("html.keep_whitespace_text") is False


def test_unreadable_file_keeps_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    assert Config(str(path)).get("html.decode_entities") is True


def test_missing_file_keeps_defaults(tmp_path):
    assert Config(str(tmp_path / "absent.json")).get("logging.file_level") == "DEBUG"


def test_save_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = Config(overrides={"html.keep_whitespace_text": True})
    config.save(str(path))

    assert Config(str(path)).get("html.keep_whitespace_text") is True


def test_save_without_path_raises():
    with pytest.raises(ValueError):
        Config().save()


def test_configure_from_applies_levels(tmp_path):
    log_file = tmp_path / "render.log"
    config = Config(overrides={"logging.console_level": "ERROR", "logging.file": str(log_file)})

    logger = configure_from(config)
    try:
        assert logger.name == LOGGER_NAME
        levels = sorted(handler.level for handler in logger.handlers)
        assert levels == [logging.DEBUG, logging.ERROR]

        logging.getLogger(f"{LOGGER_NAME}.test").debug("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()
    finally:
        configure_from(Config())


def test_performance_logger_measures(caplog):
    perf = PerformanceLogger(logging.getLogger(f"{LOGGER_NAME}.perf"), "Test")

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        with perf.measure("step"):
            pass

    assert "step" in perf.durations
    assert "Test step took" in caplog.text
    assert perf.end("never-started") == 0.0
