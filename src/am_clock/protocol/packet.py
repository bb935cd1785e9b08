"""Set-time packet builder and decoder.

Packet layout::

    +-----------+---------+-------------+----------------+----------+
    | Report ID | Command |  Timestamp  |    Reserved    | Checksum |
    |  1 byte   | 1 byte  |   4 bytes   |    57 bytes    |  1 byte  |
    +-----------+---------+-------------+----------------+----------+

- Report ID: always 0x01
- Command: 0x03 (set time)
- Timestamp: big-endian Unix seconds of the local wall-clock time, read as
  if it were UTC+8 (the firmware subtracts that offset before display)
- Reserved: zero bytes
- Checksum: CRC-8 over the first 63 bytes, initial value 0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ..exceptions import ClockError
from ..utils.crc import crc8
from .commands import REPORT_ID, Command

PACKET_SIZE = 64
TIMESTAMP_OFFSET = 2
CHECKSUM_OFFSET = PACKET_SIZE - 1
DEVICE_TIMEZONE = timezone(timedelta(hours=8))


@dataclass
class TimePacket:
    """A decoded set-time packet."""

    command: int
    timestamp: int
    checksum: int

    @property
    def device_time(self) -> datetime:
        """Wall-clock time the keyboard will display."""
        return datetime.fromtimestamp(self.timestamp, DEVICE_TIMEZONE)

    def __repr__(self) -> str:
        return (
            f"TimePacket(command=0x{self.command:02X}, "
            f"timestamp={self.timestamp} ({self.device_time:%Y-%m-%d %H:%M:%S}), "
            f"checksum=0x{self.checksum:02X})"
        )


def to_12_hour(hour: int) -> int:
    """Fold a 24-hour value onto a 12-hour clock face.

    0 becomes 12 and 13-23 lose 12 hours. No AM/PM marker is produced; the
    keyboard infers the half of the day, which is why the tool has to be run
    around midday and midnight in this mode.
    """
    if hour == 0:
        return 12
    if 13 <= hour <= 23:
        return hour - 12
    return hour


def encode_timestamp(now: datetime, use_12hour_display: bool = False) -> int:
    """Turn local wall-clock fields into the 32-bit device timestamp.

    Only the calendar and clock fields of *now* are used; any ``tzinfo`` it
    carries is ignored and the fields are pinned to UTC+8.

    Raises:
        ClockError: If the fields cannot form a valid timestamp.
    """
    hour = to_12_hour(now.hour) if use_12hour_display else now.hour
    try:
        device_time = datetime(
            now.year,
            now.month,
            now.day,
            hour,
            now.minute,
            now.second,
            tzinfo=DEVICE_TIMEZONE,
        )
        seconds = int(device_time.timestamp())
    except (ValueError, OverflowError) as e:
        raise ClockError(f"Cannot build device timestamp from {now!r}: {e}") from e
    return seconds & 0xFFFFFFFF


def build_packet(
    use_12hour_display: bool = False,
    now: datetime | None = None,
) -> bytes:
    """Build the 64-byte set-time packet.

    Args:
        use_12hour_display: Send a 12-hour hour value (fake AM/PM mode).
        now: Wall-clock time to send. Defaults to the host's local time.

    Returns:
        A 64-byte ``bytes`` object ready to write to the serial port.
    """
    if now is None:
        now = datetime.now()

    timestamp = encode_timestamp(now, use_12hour_display)
    body = bytes([REPORT_ID, Command.SET_TIME]) + timestamp.to_bytes(4, "big")
    body += b"\x00" * (CHECKSUM_OFFSET - len(body))
    return body + bytes([crc8(body, 0)])


def parse_packet(data: bytes) -> TimePacket | None:
    """Decode a set-time packet.

    Returns:
        A ``TimePacket``, or ``None`` if the size, report ID or checksum
        is wrong.
    """
    if len(data) != PACKET_SIZE:
        return None

    if data[0] != REPORT_ID:
        return None

    checksum = data[CHECKSUM_OFFSET]
    if crc8(data[:CHECKSUM_OFFSET], 0) != checksum:
        return None

    timestamp = int.from_bytes(data[TIMESTAMP_OFFSET : TIMESTAMP_OFFSET + 4], "big")
    return TimePacket(command=data[1], timestamp=timestamp, checksum=checksum)
