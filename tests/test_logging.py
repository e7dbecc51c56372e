"""Logger setup shared by the monitor components."""
from __future__ import annotations

import logging

import pytest

from midistream.util.logging import get_logger, parse_level, setup_logging


def test_setup_logging_replaces_handlers(tmp_path) -> None:
    log_file = tmp_path / "midistream.log"

    setup_logging(level=logging.DEBUG)
    logger = setup_logging(level=logging.WARNING, log_file=str(log_file))

    assert logger.name == "midistream"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 2

    get_logger("serial_input").warning("port gone")
    for handler in logger.handlers:
        handler.flush()
    assert "midistream.serial_input - WARNING - port gone" in log_file.read_text()

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def test_get_logger_is_under_midistream() -> None:
    assert get_logger("sysex").name == "midistream.sysex"


@pytest.mark.parametrize(
    ("configured", "level"),
    [
        pytest.param(None, logging.INFO, id="unset"),
        pytest.param("debug", logging.DEBUG, id="lowercase"),
        pytest.param("WARNING", logging.WARNING, id="uppercase"),
        pytest.param(logging.ERROR, logging.ERROR, id="numeric"),
    ],
)
def test_parse_level(configured, level: int) -> None:
    assert parse_level(configured) == level


def test_parse_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        parse_level("loud")
