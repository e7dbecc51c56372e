"""SYSEX payload capture next to the parser."""
from __future__ import annotations

import logging
from typing import Iterable, List

import pytest

from midistream import Message, Parser, SysexCollector


def collect(collector: SysexCollector, parser: Parser, data: Iterable[int]) -> List[bytes]:
    payloads = []
    for byte in data:
        payload = collector.observe(byte, parser.accept(byte))
        if payload is not None:
            payloads.append(payload)
    return payloads


@pytest.fixture
def collector() -> SysexCollector:
    return SysexCollector()


def test_payload_between_sysex_and_endex(collector: SysexCollector, parser: Parser) -> None:
    stream = [Message.SYSEX, 0x7E, 0x7F, 0x06, 0x01, Message.ENDEX]

    assert collect(collector, parser, stream) == [b"\x7e\x7f\x06\x01"]
    assert not collector.active


def test_empty_dump(collector: SysexCollector, parser: Parser) -> None:
    assert collect(collector, parser, [Message.SYSEX, Message.ENDEX]) == [b""]


def test_realtime_bytes_are_not_stored(collector: SysexCollector, parser: Parser) -> None:
    stream = [Message.SYSEX, 0x01, Message.RT_CLOCK, 0x02, Message.RT_SENSE, Message.ENDEX]

    assert collect(collector, parser, stream) == [b"\x01\x02"]


def test_data_outside_a_dump_is_ignored(collector: SysexCollector, parser: Parser) -> None:
    assert collect(collector, parser, [0x90, 0x40, 0x7F, 0x41]) == []
    assert not collector.active


def test_other_status_byte_aborts_the_dump(
    collector: SysexCollector, parser: Parser, caplog: pytest.LogCaptureFixture
) -> None:
    stream = [Message.SYSEX, 0x01, 0x02, 0x90, 0x40, 0x7F, Message.ENDEX]

    with caplog.at_level(logging.WARNING, logger="midistream.sysex"):
        assert collect(collector, parser, stream) == []

    assert not collector.active
    assert "interrupted by 0x90" in caplog.text


def test_restarted_dump_keeps_only_the_second(
    collector: SysexCollector, parser: Parser, caplog: pytest.LogCaptureFixture
) -> None:
    stream = [Message.SYSEX, 0x01, Message.SYSEX, 0x02, Message.ENDEX]

    with caplog.at_level(logging.WARNING, logger="midistream.sysex"):
        assert collect(collector, parser, stream) == [b"\x02"]

    assert "restarted" in caplog.text


def test_oversized_dump_is_dropped(parser: Parser, caplog: pytest.LogCaptureFixture) -> None:
    collector = SysexCollector(max_length=3)

    with caplog.at_level(logging.WARNING, logger="midistream.sysex"):
        assert collect(collector, parser, [Message.SYSEX, 1, 2, 3, 4, 5, Message.ENDEX]) == []

    assert "exceeds 3 bytes" in caplog.text
    assert collect(collector, parser, [Message.SYSEX, 9, Message.ENDEX]) == [b"\x09"]


def test_reset_drops_dump_in_progress(collector: SysexCollector, parser: Parser) -> None:
    collect(collector, parser, [Message.SYSEX, 0x01])
    assert collector.active

    collector.reset()
    assert not collector.active


def test_max_length_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SysexCollector(max_length=0)
