import logging

import pytest

from bumblebee.helper.log_utils import LOGGER_NAME, configure_logging, to_logging_level


@pytest.fixture
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    logger.handlers[:] = saved[2]


@pytest.mark.parametrize("level, expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    (logging.ERROR, logging.ERROR),
    ("nonsense", logging.INFO),
])
def test_to_logging_level(level, expected):
    assert to_logging_level(level) == expected


def test_configure_logging_to_file(tmp_path, restore_logger):
    log_file = tmp_path / "bumblebee.log"

    logger = configure_logging([f"file:{log_file}", "stderr"], "debug")
    logging.getLogger("bumblebee.resolution.resolution_engine").debug("resolving %s", "author")
    for handler in logger.handlers:
        handler.flush()

    assert logger is restore_logger
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    assert log_file.read_text(encoding="utf-8") == "bumblebee.resolution.resolution_engine: resolving author\n"


def test_configure_logging_rejects_unknown_destinations(restore_logger):
    with pytest.raises(ValueError):
        configure_logging(["syslog"])
