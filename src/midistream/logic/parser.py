"""MIDI byte stream parser.

A "midi machine": feed it bytes from a serial port one at a time and the
return value of ``accept()`` tells you when a message is complete. It keeps
no more state than the current message, the number of parameter bytes
still expected and the last two data bytes.

Instantiate a separate Parser for each physical port you read from.

About SYSEX: when ``accept()`` returns ``Message.SYSEX`` the caller may
store the raw bytes that follow until ``accept()`` returns
``Message.ENDEX``. The parser ignores the data bytes in between, so a
caller that does not care about SYSEX can keep feeding it everything.
"""

from typing import Iterable, Iterator, List, Optional

from ..util.midi import expected_parameter_count, is_message_start, is_realtime
from .messages import ParsedMessage


class Parser:
    """Incremental MIDI 1.0 parser with running status support."""

    __slots__ = ('_message', '_expected', '_data')

    def __init__(self):
        self._data: List[int] = [0, 0]
        self.reset()

    def reset(self) -> None:
        """Clear out the parser's state."""
        self._message = 0
        self._expected = 0
        self._data[0] = self._data[1] = 0

    def accept(self, byte: int) -> Optional[int]:
        """Accept the next byte of the stream.

        Args:
            byte: Next byte from the transport (0-255)

        Returns:
            The completed message code (channel included), or None while
            a message is still incomplete
        """
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"Not a byte: {byte!r}")

        # Realtime messages interrupt other messages without trashing them
        if is_realtime(byte):
            return byte

        if is_message_start(byte):
            self._message = byte
            self._expected = expected_parameter_count(byte)

            # SYSEX has no fixed length, report it right away
            if self._expected < 0:
                return byte
        elif self._expected > 0:
            # expected is never more than 2
            self._data[2 - self._expected] = byte
            self._expected -= 1
        else:
            # Stray data byte or SYSEX payload
            return None

        if self._expected == 0:
            # Re-arm for running status
            self._expected = expected_parameter_count(self._message)
            return self._message

        return None

    def snapshot(self, code: int) -> ParsedMessage:
        """Capture a completed message together with the current data bytes."""
        return ParsedMessage(code, self._data[0], self._data[1])

    def feed(self, data: Iterable[int]) -> Iterator[ParsedMessage]:
        """Accept every byte of ``data``, yielding each completed message."""
        for byte in data:
            code = self.accept(byte)
            if code is not None:
                yield self.snapshot(code)

    @property
    def message(self) -> int:
        """The message being worked on."""
        return self._message

    @property
    def expected(self) -> int:
        """Parameter bytes still expected, -1 inside a SYSEX dump."""
        return self._expected

    @property
    def data_a(self) -> int:
        return self._data[0]

    @property
    def data_b(self) -> int:
        return self._data[1]

    @property
    def int14(self) -> int:
        """14-bit parameter sent LSB, MSB."""
        return (self._data[1] << 7) | self._data[0]

    def __repr__(self) -> str:
        return (
            f"Parser(message=0x{self._message:02X}, expected={self._expected}, "
            f"data=[0x{self._data[0]:02X}, 0x{self._data[1]:02X}])"
        )
