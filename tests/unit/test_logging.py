import json
import logging
from logging import LogRecord

import pytest

from stroom import configure_logging, map_, take
from stroom.core.log import configure_logging_from
from stroom.config import Config
from tests.helpers.reducers import ResourceTracker


class MemoryHandler(logging.Handler):
    """A logging handler that stores records in memory."""

    def __init__(self):
        super().__init__()
        self.records = []
        self.buffer = []

    def emit(self, record: LogRecord):
        self.records.append(record)
        self.buffer.append(record.getMessage())

    def events(self):
        return [json.loads(msg) for msg in self.buffer]


@pytest.fixture
def memory_handler():
    """
    Attaches a memory handler to the root logger for the duration of a test
    and restores the original handlers and level afterwards.
    """
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    handler = MemoryHandler()
    root_logger.handlers = [handler]

    yield handler

    root_logger.handlers = original_handlers
    configure_logging(level="INFO", renderer="json")
    root_logger.setLevel(original_level)


def test_collect_logs_reduction_lifecycle(memory_handler):
    configure_logging(level="INFO", renderer="json")

    result = take(map_(range(10), lambda x: x + 1), 3).collect()
    assert result == [1, 2, 3]

    events = memory_handler.events()
    started = next(e for e in events if e.get("event") == "reduction_started")
    finished = next(e for e in events if e.get("event") == "reduction_finished")

    assert started["logger"] == "stroom.reduction"
    assert started["source"] == "Pipeline"
    assert finished["outcome"] == "Halted"
    assert finished["items"] == 3
    assert finished["level"] == "info"


def test_debug_events_are_filtered_at_info_level(memory_handler):
    configure_logging(level="INFO", renderer="json")
    ResourceTracker([1]).producer().collect()

    assert not [e for e in memory_handler.events() if e.get("event") == "resource_acquired"]


def test_config_file_sets_log_level(memory_handler, tmp_path):
    config_file = tmp_path / "stroom.yml"
    config_file.write_text("logging:\n  level: DEBUG\n  renderer: json\n")

    tracker = ResourceTracker([1, 2])
    assert tracker.producer().collect(config_path=str(config_file)) == [1, 2]

    names = [e.get("event") for e in memory_handler.events()]
    assert "resource_acquired" in names
    assert "resource_released" in names
    assert names.index("resource_acquired") < names.index("resource_released")


def test_configure_logging_installs_a_single_handler(memory_handler):
    configure_logging()
    configure_logging()
    names = [h.get_name() for h in logging.getLogger().handlers]
    assert names.count("stroom_handler") == 1


def test_configure_logging_rejects_unknown_renderer():
    with pytest.raises(ValueError):
        configure_logging(renderer="xml")


def test_configure_logging_from_empty_config_is_a_no_op(memory_handler):
    configure_logging(level="WARNING")
    configure_logging_from(Config({}))
    assert logging.getLogger().level == logging.WARNING
