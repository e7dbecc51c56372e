"""MIDI utility functions.

Message codes, byte classification, parameter-count tables
and formatting of decoded messages for logging.

In the MIDI protocol every byte with the high bit set starts a message
and every byte with the high bit clear is data. Channel messages are
0b1xxxyyyy, where xxx is the opcode and yyyy the channel; the codes
below do not include the channel.
"""

from enum import IntEnum
from typing import Dict, Optional, Tuple


class Message(IntEnum):
    """Message codes of the MIDI 1.0 protocol."""

    NONE = 0x00

    # Channel messages, the low nibble carries the channel number
    NOTE_OFF = 0x80      # note, velocity
    NOTE_ON = 0x90       # note, velocity
    AFTERTOUCH = 0xA0    # note, pressure
    CC_CHANGE = 0xB0     # controller, value
    PROG_CHANGE = 0xC0   # program
    CH_TOUCH = 0xD0      # pressure
    PITCH_BEND = 0xE0    # 14 bits

    # System common messages, the "channel" field selects the message
    SYSEX = 0xF0         # bulk dump, ends with ENDEX
    MTCQFRAME = 0xF1     # quarter frame
    SPP = 0xF2           # 14 bits of beats (1 beat == 6 clocks)
    SONG_SELECT = 0xF3   # song number
    UNDEF_1 = 0xF4
    UNDEF_2 = 0xF5
    TUNE_REQ = 0xF6
    ENDEX = 0xF7

    # Realtime messages may interrupt any other message
    RT_CLOCK = 0xF8      # 24 PPQ
    RT_UNDEF_1 = 0xF9
    RT_START = 0xFA
    RT_CONTINUE = 0xFB
    RT_STOP = 0xFC
    RT_UNDEF_2 = 0xFD
    RT_SENSE = 0xFE      # active sensing, every 300ms on a live connection
    RT_RESET = 0xFF


# Break points in the message space
SYS_MESSAGES = Message.SYSEX
RT_MESSAGES = Message.RT_CLOCK


class CC(IntEnum):
    """Controller numbers with predetermined meanings."""

    MODWHEEL = 1
    BREATH = 2
    VOLUME = 7
    PAN = 10             # 64 = centered
    EXPRESSION = 11
    SUSTAIN = 64         # 0 = off, 127 = on
    PORTAMENTO = 65      # 0 = off, 127 = on

    # Channel mode messages
    RESET = 121          # also called "All Sound Off"
    MODE_LOCAL = 122     # 0 = off, 127 = on
    ALL_NOTES_OFF = 123
    OMNI_OFF = 124
    OMNI_ON = 125
    POLY_OFF = 126       # number of channels (MONO ON)
    POLY_ON = 127        # MONO OFF


# Parameter bytes per channel message, indexed by the 3-bit opcode
CHANNEL_MESSAGE_BYTES: Tuple[int, ...] = (2, 2, 2, 2, 1, 1, 2)

# Parameter bytes per system common message, indexed by the low 3 bits.
# SYSEX holds the parser open (-1) until the next message-start byte.
SYSTEM_MESSAGE_BYTES: Tuple[int, ...] = (-1, 1, 2, 1, 0, 0, 0, 0)

MESSAGE_DESCRIPTIONS: Dict[int, str] = {
    Message.NOTE_OFF: 'note off',
    Message.NOTE_ON: 'note on',
    Message.AFTERTOUCH: 'polyphonic key pressure / aftertouch',
    Message.CC_CHANGE: 'control change',
    Message.PROG_CHANGE: 'program change',
    Message.CH_TOUCH: 'channel pressure / aftertouch',
    Message.PITCH_BEND: 'pitch bend change',
    Message.SYSEX: 'system exclusive (SysEx)',
    Message.MTCQFRAME: 'MIDI time code quarter frame',
    Message.SPP: 'song position pointer',
    Message.SONG_SELECT: 'song select',
    Message.UNDEF_1: 'undefined',
    Message.UNDEF_2: 'undefined',
    Message.TUNE_REQ: 'tune request',
    Message.ENDEX: 'end of system exclusive (EOX)',
    Message.RT_CLOCK: 'timing clock',
    Message.RT_UNDEF_1: 'undefined',
    Message.RT_START: 'start',
    Message.RT_CONTINUE: 'continue',
    Message.RT_STOP: 'stop',
    Message.RT_UNDEF_2: 'undefined',
    Message.RT_SENSE: 'active sensing',
    Message.RT_RESET: 'system reset',
}


def is_message_start(byte: int) -> bool:
    """True for any byte with the high bit set."""
    return (byte & 0x80) == 0x80


def is_system_common(byte: int) -> bool:
    """True for 0xF0 - 0xF7."""
    return (byte & 0xF8) == 0xF0


def is_realtime(byte: int) -> bool:
    """True for 0xF8 - 0xFF."""
    return (byte & 0xF8) == 0xF8


def is_channel_message(byte: int) -> bool:
    """True for 0x80 - 0xEF."""
    return is_message_start(byte) and byte < SYS_MESSAGES


def message_type(byte: int) -> int:
    """Message code of a channel message with the channel stripped."""
    return byte & 0xF0


def message_channel(byte: int) -> int:
    """Channel number (0-15) of a channel message."""
    return byte & 0x0F


def expected_parameter_count(message: int) -> int:
    """Return the number of data bytes that follow a message-start byte.

    Args:
        message: A message-start byte, channel included

    Returns:
        0, 1 or 2, or -1 for SYSEX whose length is not known in advance

    Raises:
        ValueError: If ``message`` is a data byte
    """
    if not is_message_start(message):
        raise ValueError(f"Not a message-start byte: 0x{message:02X}")

    # Channel messages are distinguished by the low 3 bits of the high nibble
    if message < SYS_MESSAGES:
        return CHANNEL_MESSAGE_BYTES[(message >> 4) & 0x7]

    if message < RT_MESSAGES:
        return SYSTEM_MESSAGE_BYTES[message & 0x7]

    # Realtime messages never have parameter bytes
    return 0


def combine_int14(data_a: int, data_b: int) -> int:
    """Combine two 7-bit data bytes sent LSB first into a 14-bit value."""
    return (data_b << 7) | data_a


def message_name(code: int) -> str:
    """Name of a message code, ignoring the channel of channel messages.

    Args:
        code: Message code as returned by the parser

    Returns:
        Enum member name, e.g. "NOTE_ON" or "RT_CLOCK"
    """
    if code == Message.NONE:
        return Message.NONE.name
    if not is_message_start(code):
        raise ValueError(f"Not a message code: 0x{code:02X}")
    if is_channel_message(code):
        return Message(message_type(code)).name
    return Message(code).name


def describe_message(code: int) -> str:
    """Plain description of a message code."""
    if is_channel_message(code):
        return MESSAGE_DESCRIPTIONS[message_type(code)]
    return MESSAGE_DESCRIPTIONS.get(code, 'none')


def format_message(status: int, data_a: int = 0, data_b: int = 0) -> str:
    """Format a decoded message for logging.

    Args:
        status: Completed message code (channel included)
        data_a: First parameter byte
        data_b: Second parameter byte

    Returns:
        Human-readable string representation
    """
    name = message_name(status)

    if is_channel_message(status):
        kind = message_type(status)
        if kind == Message.NOTE_ON and data_b == 0:
            name = Message.NOTE_OFF.name
        parts = [name, f"ch={message_channel(status)}"]
        if kind in (Message.NOTE_OFF, Message.NOTE_ON):
            parts.extend([f"note={data_a}", f"vel={data_b}"])
        elif kind == Message.AFTERTOUCH:
            parts.extend([f"note={data_a}", f"pressure={data_b}"])
        elif kind == Message.CC_CHANGE:
            parts.extend([f"cc={data_a}", f"val={data_b}"])
        elif kind == Message.PROG_CHANGE:
            parts.append(f"program={data_a}")
        elif kind == Message.CH_TOUCH:
            parts.append(f"pressure={data_a}")
        elif kind == Message.PITCH_BEND:
            parts.append(f"value={combine_int14(data_a, data_b)}")
        return " ".join(parts)

    if status == Message.MTCQFRAME:
        return f"{name} frame={data_a}"
    if status == Message.SPP:
        return f"{name} beats={combine_int14(data_a, data_b)}"
    if status == Message.SONG_SELECT:
        return f"{name} song={data_a}"
    return name


def parse_status(status: int) -> Tuple[str, Optional[int]]:
    """Split a message code into its name and channel.

    Returns:
        Tuple of (message_name, channel), channel is None for system messages
    """
    if is_channel_message(status):
        return (message_name(status), message_channel(status))
    return (message_name(status), None)
