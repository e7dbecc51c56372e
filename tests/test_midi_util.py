"""Byte classification, parameter tables and message formatting."""
from __future__ import annotations

import pytest

from midistream.util.midi import (
    CC,
    Message,
    combine_int14,
    describe_message,
    expected_parameter_count,
    format_message,
    is_channel_message,
    is_message_start,
    is_realtime,
    is_system_common,
    message_channel,
    message_name,
    message_type,
    parse_status,
)


def test_high_bit_separates_message_start_from_data() -> None:
    assert not any(is_message_start(byte) for byte in range(0x80))
    assert all(is_message_start(byte) for byte in range(0x80, 0x100))


def test_system_common_and_realtime_ranges() -> None:
    assert [byte for byte in range(0x100) if is_system_common(byte)] == list(range(0xF0, 0xF8))
    assert [byte for byte in range(0x100) if is_realtime(byte)] == list(range(0xF8, 0x100))
    assert [byte for byte in range(0x100) if is_channel_message(byte)] == list(range(0x80, 0xF0))


@pytest.mark.parametrize(
    ("status", "count"),
    [
        pytest.param(0x80, 2, id="note-off"),
        pytest.param(0x9F, 2, id="note-on"),
        pytest.param(0xA3, 2, id="aftertouch"),
        pytest.param(0xB0, 2, id="control-change"),
        pytest.param(0xC0, 1, id="program-change"),
        pytest.param(0xD7, 1, id="channel-pressure"),
        pytest.param(0xEF, 2, id="pitch-bend"),
        pytest.param(0xF0, -1, id="sysex"),
        pytest.param(0xF1, 1, id="quarter-frame"),
        pytest.param(0xF2, 2, id="song-position"),
        pytest.param(0xF3, 1, id="song-select"),
        pytest.param(0xF4, 0, id="undefined-1"),
        pytest.param(0xF5, 0, id="undefined-2"),
        pytest.param(0xF6, 0, id="tune-request"),
        pytest.param(0xF7, 0, id="endex"),
        pytest.param(0xF8, 0, id="clock"),
        pytest.param(0xFF, 0, id="reset"),
    ],
)
def test_expected_parameter_count(status: int, count: int) -> None:
    assert expected_parameter_count(status) == count


def test_expected_parameter_count_rejects_data_bytes() -> None:
    with pytest.raises(ValueError, match="Not a message-start byte"):
        expected_parameter_count(0x40)


def test_type_and_channel_split() -> None:
    assert message_type(0x9A) == Message.NOTE_ON
    assert message_channel(0x9A) == 10
    assert parse_status(0xB3) == ("CC_CHANGE", 3)
    assert parse_status(0xFA) == ("RT_START", None)


@pytest.mark.parametrize(
    ("code", "name"),
    [
        pytest.param(0x00, "NONE", id="none"),
        pytest.param(0x95, "NOTE_ON", id="channel"),
        pytest.param(0xF2, "SPP", id="system-common"),
        pytest.param(0xF8, "RT_CLOCK", id="realtime"),
    ],
)
def test_message_name(code: int, name: str) -> None:
    assert message_name(code) == name


def test_message_name_rejects_data_bytes() -> None:
    with pytest.raises(ValueError):
        message_name(0x40)


def test_describe_message() -> None:
    assert describe_message(0x95) == "note on"
    assert describe_message(Message.ENDEX) == "end of system exclusive (EOX)"
    assert describe_message(Message.RT_SENSE) == "active sensing"


@pytest.mark.parametrize(
    ("status", "data_a", "data_b", "text"),
    [
        pytest.param(0x90, 64, 127, "NOTE_ON ch=0 note=64 vel=127", id="note-on"),
        pytest.param(0x91, 64, 0, "NOTE_OFF ch=1 note=64 vel=0", id="note-on-zero-velocity"),
        pytest.param(0x8F, 60, 32, "NOTE_OFF ch=15 note=60 vel=32", id="note-off"),
        pytest.param(0xA0, 60, 12, "AFTERTOUCH ch=0 note=60 pressure=12", id="aftertouch"),
        pytest.param(0xB0, 7, 100, "CC_CHANGE ch=0 cc=7 val=100", id="control-change"),
        pytest.param(0xC3, 5, 99, "PROG_CHANGE ch=3 program=5", id="program-change"),
        pytest.param(0xD4, 70, 99, "CH_TOUCH ch=4 pressure=70", id="channel-pressure"),
        pytest.param(0xE2, 0, 0x40, "PITCH_BEND ch=2 value=8192", id="pitch-bend"),
        pytest.param(0xF1, 0x23, 0, "MTCQFRAME frame=35", id="quarter-frame"),
        pytest.param(0xF2, 0x10, 0x01, "SPP beats=144", id="song-position"),
        pytest.param(0xF3, 4, 0, "SONG_SELECT song=4", id="song-select"),
        pytest.param(0xF8, 1, 2, "RT_CLOCK", id="clock"),
        pytest.param(0xF0, 0, 0, "SYSEX", id="sysex"),
    ],
)
def test_format_message(status: int, data_a: int, data_b: int, text: str) -> None:
    assert format_message(status, data_a, data_b) == text


def test_combine_int14() -> None:
    assert combine_int14(0x7F, 0x7F) == 0x3FFF
    assert combine_int14(0x01, 0x00) == 1
    assert combine_int14(0x00, 0x01) == 128


def test_controller_numbers() -> None:
    assert CC.SUSTAIN == 64
    assert CC.ALL_NOTES_OFF == 123
