import json
import logging

import pytest

from core.logs import JSONFormatter, setup_logging


@pytest.fixture
def root_logger(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    return root


def test_setup_logging_replaces_its_own_handler(root_logger):
    foreign = logging.NullHandler()
    root_logger.addHandler(foreign)

    setup_logging("DEBUG", "text")
    setup_logging("WARNING", "json")

    named = [h for h in root_logger.handlers if h.get_name() == "interval_goals"]
    assert len(named) == 1
    assert isinstance(named[0].formatter, JSONFormatter)
    assert foreign in root_logger.handlers
    assert root_logger.level == logging.WARNING


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("users.service", logging.INFO, __file__, 1, "user_created user_id=%s", (7,), None)
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "users.service"
    assert payload["message"] == "user_created user_id=7"
