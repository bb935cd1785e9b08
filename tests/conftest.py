"""Fake serial hardware shared by the test modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest
import serial

from am_clock.config import PRODUCT_ID, VENDOR_ID


def make_port_info(device: str, vid: int | None = VENDOR_ID, pid: int | None = PRODUCT_ID):
    """Stand-in for a pyserial ``ListPortInfo`` entry."""
    return SimpleNamespace(device=device, vid=vid, pid=pid)


class FakeSerial:
    """Minimal ``serial.Serial`` replacement backed by a FakeBoard."""

    def __init__(self, board: FakeBoard, port: str, baudrate, timeout, write_timeout):
        self.board = board
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.write_timeout = write_timeout
        self.is_open = True
        self._pending = bytearray(board.reply)
        # A late reply is not buffered yet when the host first checks
        self._arrived = not board.late_reply

    @property
    def in_waiting(self) -> int:
        return len(self._pending) if self._arrived else 0

    def write(self, data):
        if self.board.write_error is not None:
            raise self.board.write_error
        self.board.written.append(bytes(data))
        if self.board.short_write:
            return len(data) - 1
        return len(data)

    def read(self, size=1):
        if self.board.read_error is not None:
            raise self.board.read_error
        self.board.reads.append(size)
        self._arrived = True
        chunk = bytes(self._pending[:size])
        del self._pending[:size]
        return chunk

    def close(self):
        self.is_open = False


@dataclass
class FakeBoard:
    """Keyboard simulator: pass ``board.open`` as ``serial_cls``."""

    reply: bytes = bytes([0x01, 0x03]) + b"\x00" * 62
    late_reply: bool = False
    unopenable: set = field(default_factory=set)
    write_error: Exception | None = None
    read_error: Exception | None = None
    short_write: bool = False
    opened: list = field(default_factory=list)
    written: list = field(default_factory=list)
    reads: list = field(default_factory=list)

    def open(self, port, baudrate=9600, timeout=None, write_timeout=None):
        if port in self.unopenable:
            raise serial.SerialException(f"could not open port {port}: Permission denied")
        conn = FakeSerial(self, port, baudrate, timeout, write_timeout)
        self.opened.append(conn)
        return conn


@pytest.fixture
def board() -> FakeBoard:
    return FakeBoard()


@pytest.fixture
def port_info():
    return make_port_info
