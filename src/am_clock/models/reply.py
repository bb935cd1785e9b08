"""Keyboard reply model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Reply:
    """Raw bytes the keyboard sent back after a set-time packet.

    The firmware's reply carries no status the host needs to check; receiving
    it at all is what confirms the command.
    """

    raw: bytes = b""

    def to_dict(self) -> dict:
        return {
            "raw_hex": self.raw.hex(" ") if self.raw else "",
            "raw_length": len(self.raw),
        }

    @classmethod
    def from_bytes(cls, data: bytes) -> Reply:
        return cls(raw=bytes(data))
