"""One locate, build, write, read exchange with the keyboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from .config import SyncConfig
from .exceptions import PacketWriteError, ReplyReadError
from .models.reply import Reply
from .protocol.packet import build_packet, parse_packet
from .transport.serial_connection import SerialConnection, find_device

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Where a sync stopped.

    FOUND and SENT are passed through on the way to REPLIED; every other
    member is terminal.
    """

    NOT_FOUND = "not_found"
    FOUND = "found"
    SENT = "sent"
    REPLIED = "replied"
    WRITE_FAILED = "write_failed"
    READ_FAILED = "read_failed"


@dataclass
class SessionResult:
    """Terminal state of a sync plus whatever was learned on the way."""

    state: SessionState
    port: str = ""
    reply: Reply | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state is SessionState.REPLIED

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def sync_time(
    config: SyncConfig | None = None,
    *,
    now: datetime | None = None,
    locate: Callable[..., SerialConnection | None] = find_device,
) -> SessionResult:
    """Send the current time to the keyboard and wait for its reply.

    Every step runs once. The first failure ends the session and is
    reported in the returned result; the port is closed either way.

    Args:
        config: Sync options. Defaults to ``SyncConfig()``.
        now: Wall-clock time to send instead of the host clock.
        locate: Device locator, called as ``locate(vendor_id, product_id,
            baudrate=..., timeout=...)``.

    Raises:
        EnumerationError: If the serial ports cannot be listed.
        ClockError: If the time cannot be encoded.
    """
    if config is None:
        config = SyncConfig()

    conn = locate(
        config.vendor_id,
        config.product_id,
        baudrate=config.baudrate,
        timeout=config.timeout,
    )
    if conn is None:
        logger.error("Cyberboard not found")
        return SessionResult(SessionState.NOT_FOUND, message="Cyberboard not found")

    with conn:
        logger.info("Potential Cyberboard found: %s", conn.name)

        packet = build_packet(config.use_12hour_display, now)
        logger.debug("Sending %r", parse_packet(packet))

        try:
            conn.write_packet(packet)
        except PacketWriteError as e:
            logger.error("Error: %s", e)
            return SessionResult(SessionState.WRITE_FAILED, port=conn.name, message=str(e))

        try:
            reply = conn.read_reply()
        except ReplyReadError as e:
            logger.error("Error: %s", e)
            return SessionResult(SessionState.READ_FAILED, port=conn.name, message=str(e))

    logger.info("Reply received: %s", reply.to_dict()["raw_hex"])
    logger.info("Time updated successfully!")
    return SessionResult(SessionState.REPLIED, port=conn.name, reply=reply)
