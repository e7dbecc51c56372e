"""Logging configuration and utilities.

Everything logs under the "midistream" logger tree: the serial reader,
the SYSEX collector, the MIDI forwarder and the monitor. The parser core
itself never logs, it runs once per received byte.
"""

import logging
import sys
from typing import Optional, Union


def parse_level(level: Union[int, str, None], default: int = logging.INFO) -> int:
    """Translate a configured log level into a logging constant.

    Args:
        level: Level name (e.g., "debug", "INFO") or numeric level
        default: Level used when nothing is configured

    Returns:
        Numeric logging level
    """
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the "midistream" logger for the monitor.

    Called once at startup and again after the YAML config is read, so
    existing handlers are replaced rather than stacked. Decoded messages
    are logged at INFO, realtime traffic (clock, active sensing) at DEBUG.

    Args:
        level: Logging level, usually from logging.level in the config
        log_file: Optional file to mirror the console log into

    Returns:
        The configured "midistream" logger
    """
    logger = logging.getLogger('midistream')
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get the logger of one collaborator, e.g. "serial_input" or "sysex".

    Args:
        name: Short component name

    Returns:
        The "midistream.<name>" logger
    """
    return logging.getLogger(f'midistream.{name}')
