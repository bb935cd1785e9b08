"""Serial connection to the Angry Miao Cyberboard.

The board exposes a USB CDC serial interface next to its keyboard
interfaces. It is located by USB vendor/product ID among the ports the
operating system reports, then opened at a fixed baud rate.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import serial
from serial.tools.list_ports import comports

from ..config import BAUD_RATE, PRODUCT_ID, TIMEOUT, VENDOR_ID
from ..exceptions import (
    EnumerationError,
    PacketWriteError,
    PortOpenError,
    ReplyReadError,
    ReplyTimeoutError,
)
from ..models.reply import Reply
from ..protocol.packet import PACKET_SIZE

logger = logging.getLogger(__name__)

PortLister = Callable[[], Iterable]


class SerialConnection:
    """An open serial session with the keyboard.

    Usage::

        with find_device() as conn:
            conn.write_packet(packet)
            reply = conn.read_reply()
    """

    def __init__(self, port: serial.Serial) -> None:
        self._port = port

    @property
    def name(self) -> str:
        return self._port.port or ""

    @property
    def is_open(self) -> bool:
        return bool(self._port.is_open)

    def write_packet(self, data: bytes) -> int:
        """Write one full command packet.

        Returns:
            Number of bytes written.

        Raises:
            ValueError: If *data* is not exactly one packet long.
            PacketWriteError: On an I/O error, write timeout or short write.
        """
        if len(data) != PACKET_SIZE:
            raise ValueError(f"Packet must be {PACKET_SIZE} bytes, got {len(data)}")

        try:
            written = self._port.write(data)
        except serial.SerialException as e:
            raise PacketWriteError(f"Failed to write to {self.name}: {e}") from e

        if written != len(data):
            raise PacketWriteError(
                f"Short write to {self.name}: {written} of {len(data)} bytes"
            )
        logger.debug("Wrote %d bytes to %s", written, self.name)
        return written

    def read_reply(self, size: int = PACKET_SIZE) -> Reply:
        """Block until the keyboard replies, then take up to *size* bytes.

        Whatever has arrived by the time the first byte is read is returned;
        the call does not wait for a full packet.

        Raises:
            ReplyTimeoutError: If nothing arrives before the read timeout.
            ReplyReadError: On an I/O error.
        """
        try:
            data = self._port.read(max(1, min(size, self._port.in_waiting)))
            pending = min(self._port.in_waiting, size - len(data)) if data else 0
            if pending:
                data += self._port.read(pending)
        except serial.SerialException as e:
            raise ReplyReadError(f"Failed to read from {self.name}: {e}") from e

        if not data:
            raise ReplyTimeoutError(
                f"Timeout (>{self._port.timeout * 1000:.0f} ms) "
                f"waiting for reply from {self.name}"
            )
        return Reply.from_bytes(data)

    def close(self) -> None:
        if not self.is_open:
            return
        try:
            self._port.close()
        finally:
            logger.debug("Closed %s", self.name)

    def __enter__(self) -> SerialConnection:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def _is_match(info, vendor_id: int, product_id: int) -> bool:
    # Ports that are not USB-attached report no VID/PID at all
    if info.vid is None or info.pid is None:
        return False
    return info.vid == vendor_id and info.pid == product_id


def _enumerate(list_ports: PortLister) -> list:
    try:
        return list(list_ports())
    except OSError as e:
        raise EnumerationError(f"Could not list serial ports: {e}") from e


def open_port(
    device: str,
    baudrate: int = BAUD_RATE,
    timeout: float = TIMEOUT,
    *,
    serial_cls: Callable[..., serial.Serial] = serial.Serial,
) -> SerialConnection:
    """Open *device* with the same read and write timeout.

    Raises:
        PortOpenError: If the port cannot be opened.
    """
    try:
        port = serial_cls(
            device,
            baudrate=baudrate,
            timeout=timeout,
            write_timeout=timeout,
        )
    except (serial.SerialException, OSError) as e:
        raise PortOpenError(device, e) from e

    logger.debug("Opened %s at %d baud", device, baudrate)
    return SerialConnection(port)


def list_matching_ports(
    vendor_id: int = VENDOR_ID,
    product_id: int = PRODUCT_ID,
    list_ports: PortLister = comports,
) -> list[str]:
    """Return the device names of USB serial ports matching the given IDs.

    Ports are returned in OS enumeration order and are not opened.

    Raises:
        EnumerationError: If the operating system cannot list its ports.
    """
    return [
        info.device
        for info in _enumerate(list_ports)
        if _is_match(info, vendor_id, product_id)
    ]


def find_device(
    vendor_id: int = VENDOR_ID,
    product_id: int = PRODUCT_ID,
    *,
    baudrate: int = BAUD_RATE,
    timeout: float = TIMEOUT,
    list_ports: PortLister = comports,
    serial_cls: Callable[..., serial.Serial] = serial.Serial,
) -> SerialConnection | None:
    """Open the first serial port whose USB IDs match.

    Ports are tried in OS enumeration order. A port that fails to open is
    logged and skipped; the first one that opens is returned without looking
    at the rest.

    Args:
        vendor_id: USB vendor ID to look for.
        product_id: USB product ID to look for.
        baudrate: Line speed to open the port at.
        timeout: Read and write timeout in seconds.
        list_ports: Callable returning port descriptions with ``device``,
            ``vid`` and ``pid`` attributes.
        serial_cls: Callable that opens a port, normally ``serial.Serial``.

    Returns:
        An open ``SerialConnection``, or ``None`` if nothing matched or
        every match failed to open.

    Raises:
        EnumerationError: If the operating system cannot list its ports.
    """
    for info in _enumerate(list_ports):
        if not _is_match(info, vendor_id, product_id):
            logger.debug("Skipping %s (vid=%s, pid=%s)", info.device, info.vid, info.pid)
            continue

        try:
            return open_port(info.device, baudrate, timeout, serial_cls=serial_cls)
        except PortOpenError as e:
            logger.warning("%s", e)

    return None
