"""Shared fixtures for the midistream test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import yaml

from midistream.logic.parser import Parser


class FakePort:
    """Stand-in for a mido output port."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: List[Any] = []
        self.closed = False
        self.fail = fail

    def send(self, msg: Any) -> None:
        if self.fail:
            raise IOError("device unplugged")
        self.sent.append(msg)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def parser() -> Parser:
    return Parser()


@pytest.fixture
def fake_port() -> FakePort:
    return FakePort()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[Dict[str, Any]], str]:
    def _write(config: Dict[str, Any]) -> str:
        path = tmp_path / "midistream.yaml"
        path.write_text(yaml.safe_dump(config))
        return str(path)

    return _write
