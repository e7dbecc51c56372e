"""Incremental MIDI 1.0 byte stream parser."""

from .logic.messages import ParsedMessage
from .logic.parser import Parser
from .logic.sysex import SysexCollector
from .util.midi import CC, Message

__version__ = "0.1.0"

__all__ = [
    'CC',
    'Message',
    'ParsedMessage',
    'Parser',
    'SysexCollector',
]
