"""Exception types raised while syncing the keyboard clock."""

from __future__ import annotations


class AmClockError(Exception):
    """Base class for every am-clock failure."""


class EnumerationError(AmClockError):
    """The operating system could not list its serial ports."""


class PortOpenError(AmClockError):
    """A matching serial port exists but could not be opened."""

    def __init__(self, port: str, reason: object) -> None:
        self.port = port
        self.reason = reason
        super().__init__(f"Failed to open serial port {port}: {reason}")


class PacketWriteError(AmClockError):
    """The command packet could not be written in full."""


class ReplyReadError(AmClockError):
    """Reading the keyboard's reply failed."""


class ReplyTimeoutError(ReplyReadError):
    """The keyboard did not reply within the read timeout."""


class ClockError(AmClockError):
    """The host clock could not be turned into a device timestamp."""


__all__ = [
    "AmClockError",
    "EnumerationError",
    "PortOpenError",
    "PacketWriteError",
    "ReplyReadError",
    "ReplyTimeoutError",
    "ClockError",
]
