"""End-to-end tests for the sync session against a fake keyboard."""

from __future__ import annotations

from datetime import datetime
from functools import partial

import pytest
import serial

from am_clock.config import SyncConfig
from am_clock.exceptions import EnumerationError
from am_clock.protocol.packet import build_packet
from am_clock.session import SessionResult, SessionState, sync_time
from am_clock.transport.serial_connection import find_device

NOON = datetime(2024, 6, 14, 12, 0, 0)


def _locator(board, *ports):
    return partial(find_device, list_ports=lambda: list(ports), serial_cls=board.open)


def test_sync_success(board, port_info):
    result = sync_time(SyncConfig(), now=NOON, locate=_locator(board, port_info("/dev/ttyACM0")))
    assert result.state is SessionState.REPLIED
    assert result.ok
    assert result.exit_code == 0
    assert result.port == "/dev/ttyACM0"
    assert result.reply.raw == board.reply
    assert board.written == [build_packet(False, NOON)]
    assert not board.opened[0].is_open


def test_sync_default_config(board, port_info):
    result = sync_time(locate=_locator(board, port_info("/dev/ttyACM0")))
    assert result.exit_code == 0
    assert len(board.written) == 1


def test_sync_12_hour_mode(board, port_info):
    afternoon = datetime(2024, 6, 14, 14, 5, 0)
    config = SyncConfig(use_12hour_display=True)
    sync_time(config, now=afternoon, locate=_locator(board, port_info("/dev/ttyACM0")))
    assert board.written == [build_packet(False, datetime(2024, 6, 14, 2, 5, 0))]


def test_sync_not_found_builds_no_packet(board, port_info, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("packet built without a device")

    monkeypatch.setattr("am_clock.session.build_packet", fail)
    result = sync_time(locate=_locator(board, port_info("/dev/ttyS0", vid=None, pid=None)))
    assert result.state is SessionState.NOT_FOUND
    assert result.exit_code == 1
    assert board.opened == []


def test_sync_all_opens_fail(board, port_info):
    board.unopenable = {"/dev/ttyACM0", "/dev/ttyACM1"}
    locate = _locator(board, port_info("/dev/ttyACM0"), port_info("/dev/ttyACM1"))
    result = sync_time(locate=locate)
    assert result.state is SessionState.NOT_FOUND
    assert result.exit_code == 1
    assert board.written == []


def test_sync_write_failure(board, port_info):
    board.write_error = serial.SerialException("write failed: [Errno 5] Input/output error")
    result = sync_time(now=NOON, locate=_locator(board, port_info("/dev/ttyACM0")))
    assert result.state is SessionState.WRITE_FAILED
    assert result.exit_code == 1
    assert "Input/output error" in result.message
    assert not board.opened[0].is_open


def test_sync_reply_timeout(board, port_info):
    board.reply = b""
    result = sync_time(now=NOON, locate=_locator(board, port_info("/dev/ttyACM0")))
    assert result.state is SessionState.READ_FAILED
    assert result.exit_code == 1
    assert result.reply is None
    assert len(board.written) == 1
    assert not board.opened[0].is_open


def test_sync_read_error(board, port_info):
    board.read_error = serial.SerialException("device disconnected")
    result = sync_time(now=NOON, locate=_locator(board, port_info("/dev/ttyACM0")))
    assert result.state is SessionState.READ_FAILED
    assert result.exit_code == 1


def test_sync_enumeration_failure_propagates(board):
    def broken():
        raise OSError("no ports for you")

    locate = partial(find_device, list_ports=broken, serial_cls=board.open)
    with pytest.raises(EnumerationError):
        sync_time(locate=locate)


def test_sync_passes_config_to_locator():
    seen = {}

    def locate(vendor_id, product_id, **kwargs):
        seen.update(vendor_id=vendor_id, product_id=product_id, **kwargs)
        return None

    config = SyncConfig(vendor_id=0x1234, product_id=0x5678, baudrate=19200, timeout=1.0)
    sync_time(config, locate=locate)
    assert seen == {
        "vendor_id": 0x1234,
        "product_id": 0x5678,
        "baudrate": 19200,
        "timeout": 1.0,
    }


@pytest.mark.parametrize(
    "state, code",
    [
        (SessionState.REPLIED, 0),
        (SessionState.NOT_FOUND, 1),
        (SessionState.WRITE_FAILED, 1),
        (SessionState.READ_FAILED, 1),
    ],
)
def test_result_exit_codes(state, code):
    assert SessionResult(state).exit_code == code
