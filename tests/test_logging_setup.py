"""Tests for the JSONL logging bootstrap."""

import json
import logging

import pytest

from libpack.logging_setup import JsonlHandler
from libpack.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_writes_structured_lines(tmp_path, restore_root_logger):
    log_path = tmp_path / "logs" / "libpack.log.jsonl"
    init_json_logging(str(log_path), "debug")

    logging.getLogger("libpack.test").info("Resolved %s", "@acme/widgets", extra={"event": "resolve", "entries": 2})

    [line] = _read_lines(log_path)
    assert line["lvl"] == "INFO"
    assert line["logger"] == "libpack.test"
    assert line["message"] == "Resolved @acme/widgets"
    assert line["event"] == "resolve"
    assert line["entries"] == 2
    assert line["schema"] == {"name": "libpack.log", "ver": "1.0.0"}


def test_level_filters_records(tmp_path, restore_root_logger):
    log_path = tmp_path / "libpack.log.jsonl"
    init_json_logging(str(log_path), "WARNING")

    logger = logging.getLogger("libpack.test")
    logger.info("hidden")
    logger.warning("shown")

    assert [line["message"] for line in _read_lines(log_path)] == ["shown"]


def test_reinitialization_replaces_handler(tmp_path, restore_root_logger):
    init_json_logging(str(tmp_path / "first.jsonl"), "INFO")
    init_json_logging(str(tmp_path / "second.jsonl"), "INFO")

    handlers = [h for h in restore_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "second.jsonl"
