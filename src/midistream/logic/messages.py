"""Decoded message values handed out by the parser."""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional

import mido

from ..util.midi import (
    Message,
    combine_int14,
    describe_message,
    expected_parameter_count,
    format_message,
    is_channel_message,
    is_realtime,
    message_channel,
    message_type,
    parse_status,
)

CHANNEL = 'channel'
SYSTEM = 'system'
REALTIME = 'realtime'

# Codes that have no standalone mido message
UNFORWARDABLE: FrozenSet[int] = frozenset({
    Message.SYSEX,
    Message.ENDEX,
    Message.UNDEF_1,
    Message.UNDEF_2,
    Message.RT_UNDEF_1,
    Message.RT_UNDEF_2,
})


@dataclass(frozen=True)
class ParsedMessage:
    """A completed message and the parameter bytes it was received with.

    For messages with fewer than two parameters the unused data bytes are
    whatever the parser last stored there and carry no meaning.
    """

    status: int
    data_a: int = 0
    data_b: int = 0

    @property
    def kind(self) -> str:
        if is_channel_message(self.status):
            return CHANNEL
        if is_realtime(self.status):
            return REALTIME
        return SYSTEM

    @property
    def type(self) -> Message:
        """Message code without the channel."""
        if is_channel_message(self.status):
            return Message(message_type(self.status))
        return Message(self.status)

    @property
    def channel(self) -> Optional[int]:
        if is_channel_message(self.status):
            return message_channel(self.status)
        return None

    @property
    def int14(self) -> int:
        return combine_int14(self.data_a, self.data_b)

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def parameter_count(self) -> int:
        if is_realtime(self.status):
            return 0
        return max(0, expected_parameter_count(self.status))

    def to_bytes(self) -> bytes:
        """Wire bytes of the message, status byte always included."""
        data: List[int] = [self.data_a, self.data_b]
        return bytes([self.status] + data[:self.parameter_count])

    def to_mido(self) -> Optional[mido.Message]:
        """Convert to a mido message, None when mido has no equivalent."""
        if self.status in UNFORWARDABLE:
            return None
        return mido.Message.from_bytes(list(self.to_bytes()))

    def as_dict(self) -> Dict[str, Any]:
        name, channel = parse_status(self.status)
        return {
            'status': self.status,
            'name': name,
            'kind': self.kind,
            'channel': channel,
            'data': list(self.to_bytes()[1:]),
            'description': describe_message(self.status),
            'text': str(self),
        }

    def __str__(self) -> str:
        return format_message(self.status, self.data_a, self.data_b)
