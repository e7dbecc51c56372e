"""SYSEX payload capture.

The parser only reports where a SYSEX dump begins and ends. This module
keeps the raw bytes in between for callers that want the payload.
"""

from typing import Optional

from ..util.logging import get_logger
from ..util.midi import Message, is_message_start, is_realtime

logger = get_logger('sysex')

DEFAULT_MAX_LENGTH = 4096


class SysexCollector:
    """Collects SYSEX payload bytes next to a Parser."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        """Initialize the collector.

        Args:
            max_length: Largest payload kept; longer dumps are dropped
        """
        if max_length < 1:
            raise ValueError("max_length must be positive")
        self.max_length = max_length
        self._buffer = bytearray()
        self._active = False
        self._overflowed = False

    @property
    def active(self) -> bool:
        """True between SYSEX and ENDEX."""
        return self._active

    def reset(self):
        """Drop any dump in progress."""
        self._buffer.clear()
        self._active = False
        self._overflowed = False

    def observe(self, byte: int, code: Optional[int]) -> Optional[bytes]:
        """Track one byte together with what the parser returned for it.

        Args:
            byte: The raw byte that was passed to ``Parser.accept``
            code: The value ``Parser.accept`` returned for it

        Returns:
            The payload (without SYSEX and ENDEX) once a dump completes,
            otherwise None
        """
        if code == Message.SYSEX:
            if self._active:
                logger.warning(f"SYSEX restarted before ENDEX, dropped {len(self._buffer)} bytes")
            self.reset()
            self._active = True
            return None

        if not self._active or is_realtime(byte):
            return None

        if code == Message.ENDEX:
            payload = None if self._overflowed else bytes(self._buffer)
            self.reset()
            return payload

        if is_message_start(byte):
            logger.warning(
                f"SYSEX interrupted by 0x{byte:02X} after {len(self._buffer)} bytes, dump dropped"
            )
            self.reset()
            return None

        if self._overflowed:
            return None

        if len(self._buffer) >= self.max_length:
            logger.warning(f"SYSEX dump exceeds {self.max_length} bytes, ignoring the rest")
            self._buffer.clear()
            self._overflowed = True
            return None

        self._buffer.append(byte)
        return None
